"""
Typed input schemas for contract writes.

Each schema validates every field before anything is sent to the chain,
so malformed input surfaces as a ValidationError naming the field instead
of a late contract revert.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Union

from eth_utils import to_checksum_address

from seas_toolkit.shared.constants import ChainConstants, FeeConstants
from seas_toolkit.shared.exceptions import ValidationError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")

Amount = Union[Decimal, int, float, str]


def validate_address(address: str, param_name: str = "address") -> str:
    """Validate ``0x`` + 40 hex characters and return the checksum form"""
    if not address or not isinstance(address, str):
        raise ValidationError(param_name, "address must be a non-empty string")
    if not ADDRESS_PATTERN.match(address):
        raise ValidationError(
            param_name, f"{address} is not a valid address (0x + 40 hex chars)"
        )
    return to_checksum_address(address)


def validate_name(value: str, param_name: str = "name") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(param_name, "must not be empty")
    return value.strip()


def validate_non_negative_int(value: int, param_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(param_name, "must be an integer")
    if value < 0:
        raise ValidationError(param_name, "must be non-negative")
    return value


def validate_int_range(
    value: int, param_name: str, minimum: int, maximum: int
) -> int:
    validate_non_negative_int(value, param_name)
    if not minimum <= value <= maximum:
        raise ValidationError(
            param_name, f"must be between {minimum} and {maximum}"
        )
    return value


def validate_positive_amount(value: Amount, param_name: str = "amount") -> Decimal:
    """Token amount in whole-token units, e.g. ``"1.5"``"""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(param_name, f"{value!r} is not a number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(param_name, "must be greater than zero")
    # Reject anything finer than one base unit
    _, digits, exponent = amount.as_tuple()
    excess = -exponent - ChainConstants.TOKEN_DECIMALS
    if excess > 0 and int("".join(map(str, digits))) % 10**excess:
        raise ValidationError(
            param_name,
            f"has more than {ChainConstants.TOKEN_DECIMALS} decimal places",
        )
    return amount


def validate_schedule(start_time: int, end_time: int) -> None:
    validate_non_negative_int(start_time, "start_time")
    validate_non_negative_int(end_time, "end_time")
    if end_time <= start_time:
        raise ValidationError("end_time", "must be after start_time")


def validate_admin_fee(admin_fee_percentage: int) -> int:
    validate_int_range(
        admin_fee_percentage,
        "admin_fee_percentage",
        0,
        FeeConstants.MAX_ADMIN_FEE_PERCENTAGE,
    )
    if admin_fee_percentage + FeeConstants.PLATFORM_FEE_PERCENTAGE > 100:
        raise ValidationError(
            "admin_fee_percentage", "fees exceed 100% of campaign funds"
        )
    return admin_fee_percentage


@dataclass
class CampaignInput:
    name: str
    description: str
    start_time: int
    end_time: int
    admin_fee_percentage: int
    vote_multiplier: int = 1
    max_winners: int = 0
    use_quadratic_distribution: bool = False
    logo: str = ""
    demo_video: str = ""

    def validate(self) -> "CampaignInput":
        self.name = validate_name(self.name)
        validate_schedule(self.start_time, self.end_time)
        validate_admin_fee(self.admin_fee_percentage)
        validate_non_negative_int(self.vote_multiplier, "vote_multiplier")
        if self.vote_multiplier < 1:
            raise ValidationError("vote_multiplier", "must be at least 1")
        validate_non_negative_int(self.max_winners, "max_winners")
        return self

    def to_args(self) -> list:
        return [
            self.name,
            self.description,
            self.logo,
            self.demo_video,
            self.start_time,
            self.end_time,
            self.admin_fee_percentage,
            self.vote_multiplier,
            self.max_winners,
            self.use_quadratic_distribution,
        ]


@dataclass
class CampaignUpdateInput:
    campaign_id: int
    name: str
    description: str
    start_time: int
    end_time: int
    admin_fee_percentage: int
    logo: str = ""
    demo_video: str = ""

    def validate(self) -> "CampaignUpdateInput":
        validate_non_negative_int(self.campaign_id, "campaign_id")
        self.name = validate_name(self.name)
        validate_schedule(self.start_time, self.end_time)
        validate_admin_fee(self.admin_fee_percentage)
        return self

    def to_args(self) -> list:
        return [
            self.campaign_id,
            self.name,
            self.description,
            self.logo,
            self.demo_video,
            self.start_time,
            self.end_time,
            self.admin_fee_percentage,
        ]


class _ProjectMetadata:
    """Fields shared by project submission and update."""

    name: str
    description: str
    github_link: str
    social_link: str
    testing_link: str
    logo: str
    demo_video: str
    contracts: List[str]

    def _validate_metadata(self) -> None:
        self.name = validate_name(self.name)
        self.contracts = [
            validate_address(a, f"contracts[{i}]")
            for i, a in enumerate(self.contracts)
        ]

    def _metadata_args(self) -> list:
        return [
            self.name,
            self.description,
            self.github_link,
            self.social_link,
            self.testing_link,
            self.logo,
            self.demo_video,
            self.contracts,
        ]


@dataclass
class ProjectInput(_ProjectMetadata):
    campaign_id: int
    name: str
    description: str
    github_link: str = ""
    social_link: str = ""
    testing_link: str = ""
    logo: str = ""
    demo_video: str = ""
    contracts: List[str] = field(default_factory=list)

    def validate(self) -> "ProjectInput":
        validate_non_negative_int(self.campaign_id, "campaign_id")
        self._validate_metadata()
        return self

    def to_args(self) -> list:
        return [self.campaign_id] + self._metadata_args()


@dataclass
class ProjectUpdateInput(_ProjectMetadata):
    campaign_id: int
    project_id: int
    name: str
    description: str
    github_link: str = ""
    social_link: str = ""
    testing_link: str = ""
    logo: str = ""
    demo_video: str = ""
    contracts: List[str] = field(default_factory=list)

    def validate(self) -> "ProjectUpdateInput":
        validate_non_negative_int(self.campaign_id, "campaign_id")
        validate_non_negative_int(self.project_id, "project_id")
        self._validate_metadata()
        return self

    def to_args(self) -> list:
        return [self.campaign_id, self.project_id] + self._metadata_args()


@dataclass
class VoteInput:
    campaign_id: int
    project_id: int
    amount: Amount  # Whole tokens, converted to base units on submission

    def validate(self) -> "VoteInput":
        validate_non_negative_int(self.campaign_id, "campaign_id")
        validate_non_negative_int(self.project_id, "project_id")
        self.amount = validate_positive_amount(self.amount)
        return self
