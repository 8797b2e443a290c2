import setuptools

setuptools.setup(
    name="msk-capacity-resolver",
    version="0.1.0",
    description="Resolves Amazon MSK broker capacity from the MSK and EC2 APIs",
    python_requires=">=3.10",
    packages=setuptools.find_packages(exclude=("tests*",)),
    install_requires=[
        "pydantic>2.0",
        "boto3",
        "botocore",
        "isodate",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    entry_points={
        "console_scripts": [
            "describe-msk-capacity = msk_capacity_resolver.tools.describe_capacity:main",
        ]
    },
)
