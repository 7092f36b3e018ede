"""envconfig Quickstart Example.

Demonstrates basic usage:
- Schema definition with sized numerics, enums, containers and durations
- Per-field options (explicit names, raw defaults, custom parsers)
- Cached binding from the environment
- Aggregated error reporting

Usage:
    export SHOP_PORT=8443 SHOP_HOSTS=a.example,b.example SHOP_RATE_LIMITS=DAYS:1000,HOURS:100
    python examples/quickstart.py
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Annotated

from pydantic import HttpUrl

from envconfig import ConfigBindingError, EnvConfig, EnvVar, Int16, Period
from envconfig.log import configure_logging


# =============================================================================
# Schema Definitions
# =============================================================================

class TimeUnit(Enum):
    DAYS = "d"
    HOURS = "h"
    MINUTES = "m"


class Region:
    """Application type without a built-in parser."""

    def __init__(self, code: str):
        self.code = code

    def __repr__(self) -> str:
        return f"Region({self.code!r})"


def parse_region(value, converter, *type_args) -> Region:
    return Region((value or "eu-west").lower())


class ShopSettings(EnvConfig):
    """Settings of a shop service, read from SHOP_* variables."""

    port: Int16 = 8080
    hosts: list[str]
    debug: Annotated[bool, EnvVar(default="false")]
    rate_limits: dict[TimeUnit, int] | None = None
    request_timeout: Annotated[timedelta, EnvVar(default="PT30S")]
    retention: Annotated[Period, EnvVar(default="P1M")]
    payment_url: Annotated[HttpUrl, EnvVar(name="PAYMENTS", default="https://pay.example/api")]
    region: Annotated[Region, EnvVar(default="EU-WEST", parsers=(parse_region,))]


# =============================================================================
# Main
# =============================================================================

def main():
    configure_logging("INFO")

    print("=" * 60)
    print("Environment variables read:")
    for field, env_name in ShopSettings.env_names("shop").items():
        print(f"   {field:<16} {env_name}")

    print("\n" + "=" * 60)
    try:
        settings = ShopSettings.from_env("shop")
    except ConfigBindingError as e:
        print(e)
        return

    print(f"   port:            {settings.port}")
    print(f"   hosts:           {settings.hosts}")
    print(f"   rate_limits:     {dict(settings.rate_limits or {})}")
    print(f"   request_timeout: {settings.request_timeout}")
    print(f"   retention:       {settings.retention}")
    print(f"   payment_url:     {settings.payment_url}")
    print(f"   region:          {settings.region}")

    # Cached: the same object for the same prefix
    assert ShopSettings.from_env("shop") is settings

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
