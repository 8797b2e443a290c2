import argparse
import json
import logging
import sys
from typing import Any
from typing import Optional
from typing import Sequence

import botocore

from msk_capacity_resolver.aws.msk_client import AWSClient
from msk_capacity_resolver.interface import CapacityFetchError

logger = logging.getLogger(__name__)


def parse_ratio(inp: str) -> float:
    """Parses a fraction in [0, 1] like 0.5"""
    try:
        ratio = float(inp)
    except ValueError as exp:
        raise argparse.ArgumentTypeError(f"{inp!r} is not a number") from exp
    if not 0 <= ratio <= 1:
        raise argparse.ArgumentTypeError(f"ratio must be between 0 and 1, got {ratio}")
    return ratio


def describe(aws: AWSClient) -> Any:
    state, capacity_info = aws.get_broker_capacity_info()
    return {
        "cluster_arn": aws.cluster_arn,
        "state": state.value,
        "capacity_info": json.loads(capacity_info.model_dump_json()),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="describe-msk-capacity",
        description=(
            "Fetch the broker capacity a capacity resolver would "
            "cache for an Amazon MSK cluster"
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--cluster-arn", required=True, help="MSK cluster ARN")
    parser.add_argument("--region", default="us-east-1")
    parser.add_argument(
        "--cpu-ratio",
        type=parse_ratio,
        default=1.0,
        help="Fraction of the 100 point CPU budget brokers may use",
    )
    parser.add_argument(
        "--inbound-ratio",
        type=parse_ratio,
        default=0.5,
        help="Fraction of instance bandwidth attributed to inbound traffic",
    )
    parser.add_argument("--debug", action="store_true", help="Show verbose output")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        aws = AWSClient.from_region(
            args.cluster_arn, args.region, args.cpu_ratio, args.inbound_ratio
        )
    except botocore.exceptions.BotoCoreError as exp:
        print(f"Unable to create AWS clients: {exp}", file=sys.stderr)
        return 2

    with aws:
        try:
            result = describe(aws)
        except CapacityFetchError as exp:
            logger.error("%s", exp)
            print(
                "Unable to describe the cluster. Do you have AWS credentials "
                "refreshed?",
                file=sys.stderr,
            )
            return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
