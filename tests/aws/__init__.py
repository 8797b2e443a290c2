import copy
import json

TEST_CLUSTER_ARN = (
    "arn:aws:kafka:us-east-1:123456789012:cluster/test-cluster/"
    "a25ac233-1303-4040-a9b3-6fd4092aaccd-1"
)
TEST_INSTANCE_TYPE = "t3.small"

mock_describe_cluster = json.loads(
    """
{
    "ClusterInfo": {
        "ClusterArn": "arn:aws:kafka:us-east-1:123456789012:cluster/test-cluster/a25ac233-1303-4040-a9b3-6fd4092aaccd-1",
        "ClusterName": "test-cluster",
        "CurrentVersion": "K3AEGXETSR30VB",
        "NumberOfBrokerNodes": 3,
        "State": "ACTIVE",
        "BrokerNodeGroupInfo": {
            "BrokerAZDistribution": "DEFAULT",
            "ClientSubnets": [
                "subnet-0d44a1567c2ce409a",
                "subnet-051201cac65561565",
                "subnet-08b4eceb2a62afd2e"
            ],
            "InstanceType": "kafka.t3.small",
            "SecurityGroups": [
                "sg-0a8aa4f3e5d4c2b1e"
            ],
            "StorageInfo": {
                "EbsStorageInfo": {
                    "VolumeSize": 100
                }
            }
        },
        "CurrentBrokerSoftwareInfo": {
            "KafkaVersion": "3.5.1"
        },
        "EnhancedMonitoring": "DEFAULT",
        "ZookeeperConnectString": "z-1.testcluster.abc123.c2.kafka.us-east-1.amazonaws.com:2181"
    }
}
"""
)

mock_describe_t3_small = json.loads(
    """
{
    "InstanceTypes": [
        {
            "InstanceType": "t3.small",
            "CurrentGeneration": true,
            "FreeTierEligible": false,
            "SupportedUsageClasses": [
                "on-demand",
                "spot"
            ],
            "SupportedRootDeviceTypes": [
                "ebs"
            ],
            "SupportedVirtualizationTypes": [
                "hvm"
            ],
            "BareMetal": false,
            "Hypervisor": "nitro",
            "ProcessorInfo": {
                "SupportedArchitectures": [
                    "x86_64"
                ],
                "SustainedClockSpeedInGhz": 2.5,
                "Manufacturer": "Intel"
            },
            "VCpuInfo": {
                "DefaultVCpus": 2,
                "DefaultCores": 1,
                "DefaultThreadsPerCore": 2,
                "ValidCores": [
                    1
                ],
                "ValidThreadsPerCore": [
                    1,
                    2
                ]
            },
            "MemoryInfo": {
                "SizeInMiB": 2048
            },
            "InstanceStorageSupported": false,
            "NetworkInfo": {
                "NetworkPerformance": "Up to 5 Gigabit",
                "MaximumNetworkInterfaces": 3,
                "MaximumNetworkCards": 1,
                "DefaultNetworkCardIndex": 0,
                "NetworkCards": [
                    {
                        "NetworkCardIndex": 0,
                        "NetworkPerformance": "Up to 5 Gigabit",
                        "MaximumNetworkInterfaces": 3,
                        "BaselineBandwidthInGbps": 0.128,
                        "PeakBandwidthInGbps": 5.0
                    }
                ],
                "Ipv4AddressesPerInterface": 4,
                "Ipv6AddressesPerInterface": 4,
                "Ipv6Supported": true,
                "EnaSupport": "required",
                "EfaSupported": false,
                "EncryptionInTransitSupported": false,
                "EnaSrdSupported": false
            },
            "BurstablePerformanceSupported": true,
            "HibernationSupported": true
        }
    ]
}
"""
)


def describe_cluster(state="ACTIVE", instance_type="kafka.t3.small", volume_size=100):
    response = copy.deepcopy(mock_describe_cluster)
    info = response["ClusterInfo"]
    info["State"] = state
    info["BrokerNodeGroupInfo"]["InstanceType"] = instance_type
    info["BrokerNodeGroupInfo"]["StorageInfo"]["EbsStorageInfo"][
        "VolumeSize"
    ] = volume_size
    return response


def describe_instance_types(network_performance="Up to 10 Gigabit"):
    response = copy.deepcopy(mock_describe_t3_small)
    response["InstanceTypes"][0]["NetworkInfo"][
        "NetworkPerformance"
    ] = network_performance
    return response
