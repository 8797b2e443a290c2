from datetime import timedelta
from typing import Any
from typing import Mapping

import isodate  # type: ignore
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import ValidationError

from msk_capacity_resolver.interface import ConfigurationError

MSK_CLUSTER_ARN = "msk.cluster.arn"
MSK_CLUSTER_REGION = "msk.cluster.region"
MSK_CPU_CAPACITY_RATIO = "msk.cpu.capacity.ratio"
MSK_NETWORK_INBOUND_TRAFFIC_RATIO = "msk.network.inbound.traffic.ratio"
BROKER_CAPACITY_CONFIG_RESOLVER_AWS_FETCH_PERIOD_MINUTES = (
    "broker.capacity.config.resolver.aws.fetch.period.minutes"
)

# option key -> RefreshConfig field
CONFIG_FIELDS = {
    MSK_CLUSTER_ARN: "cluster_arn",
    MSK_CLUSTER_REGION: "region",
    MSK_CPU_CAPACITY_RATIO: "cpu_capacity_ratio",
    MSK_NETWORK_INBOUND_TRAFFIC_RATIO: "network_inbound_ratio",
    BROKER_CAPACITY_CONFIG_RESOLVER_AWS_FETCH_PERIOD_MINUTES: "refresh_period",
}

MIN_REFRESH_PERIOD = timedelta(minutes=1)


def iso_to_seconds(iso_duration: str) -> int:
    parsed = isodate.parse_duration(iso_duration)
    # parse_duration only returns a Duration when years or months are present
    if isinstance(parsed, isodate.Duration):
        raise ValueError(
            f"refresh period {iso_duration!r} must not use years or months"
        )
    return int(parsed.total_seconds())


def parse_refresh_period(value: Any) -> timedelta:
    """Minutes as an int (or digit string), or an ISO-8601 duration like PT5M"""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError("refresh period must be a number of minutes")
    if isinstance(value, int):
        return timedelta(minutes=value)
    if isinstance(value, str):
        value = value.strip()
        if value.isdigit():
            return timedelta(minutes=int(value))
        if value.upper().startswith("P"):
            try:
                return timedelta(seconds=iso_to_seconds(value.upper()))
            except isodate.ISO8601Error as exp:
                raise ValueError(f"invalid ISO-8601 duration {value!r}") from exp
    raise ValueError(
        f"refresh period must be whole minutes or an ISO-8601 duration, got {value!r}"
    )


class RefreshConfig(BaseModel):
    cluster_arn: str = Field(min_length=1)
    region: str = Field(min_length=1)
    cpu_capacity_ratio: float = Field(ge=0, le=1)
    network_inbound_ratio: float = Field(ge=0, le=1)
    refresh_period: timedelta = MIN_REFRESH_PERIOD
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("refresh_period", mode="before")
    @classmethod
    def _parse_refresh_period(cls, value: Any) -> timedelta:
        return parse_refresh_period(value)

    @field_validator("refresh_period")
    @classmethod
    def _at_least_one_minute(cls, value: timedelta) -> timedelta:
        if value < MIN_REFRESH_PERIOD:
            raise ValueError(f"refresh period must be at least 1 minute, got {value}")
        return value

    @property
    def refresh_period_seconds(self) -> float:
        return self.refresh_period.total_seconds()


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def load_config(configs: Mapping[str, Any]) -> RefreshConfig:
    """Build a RefreshConfig from resolver options keyed by the msk.* names

    Every option is required. Missing or empty values and values pydantic
    rejects all surface as ConfigurationError naming the option key.
    """
    missing = [key for key in CONFIG_FIELDS if _missing(configs.get(key))]
    if missing:
        raise ConfigurationError(
            "AWS Broker Data Source is enabled, so "
            + ", ".join(missing)
            + (" is" if len(missing) == 1 else " are")
            + " not allowed to be empty"
        )

    fields = {field: configs[key] for key, field in CONFIG_FIELDS.items()}
    try:
        return RefreshConfig(**fields)
    except ValidationError as exp:
        by_field = {field: key for key, field in CONFIG_FIELDS.items()}
        problems = []
        for error in exp.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            problems.append(f"{by_field.get(field, field)}: {error['msg']}")
        raise ConfigurationError(
            "Invalid AWS Broker Data Source config: " + "; ".join(problems)
        ) from exp
