"""
Unit tests for write input schemas.
"""

from decimal import Decimal

import pytest
from eth_utils import to_checksum_address

from seas_toolkit.contracts.validation import (
    CampaignInput,
    CampaignUpdateInput,
    ProjectInput,
    ProjectUpdateInput,
    VoteInput,
    validate_address,
    validate_positive_amount,
)
from seas_toolkit.shared.exceptions import NonRetryableException, ValidationError


def campaign_input(**overrides) -> CampaignInput:
    fields = dict(
        name="Ocean Cleanup",
        description="Fund the cleanup",
        start_time=1_700_000_000,
        end_time=1_700_086_400,
        admin_fee_percentage=5,
    )
    fields.update(overrides)
    return CampaignInput(**fields)


class TestValidateAddress:
    def test_returns_checksum_form(self):
        address = validate_address("0xabcdefabcdefabcdefabcdefabcdefabcdefabcd")
        assert address == to_checksum_address(
            "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
        )

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "0x123",
            "abcdefabcdefabcdefabcdefabcdefabcdefabcd",
            "0xzzcdefabcdefabcdefabcdefabcdefabcdefabcd",
            "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd00",
        ],
    )
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_address(value, "wallet")
        assert exc_info.value.field == "wallet"


class TestCampaignInput:
    def test_valid_input_builds_contract_args(self):
        args = campaign_input(max_winners=3, use_quadratic_distribution=True)
        args.validate()

        assert args.to_args() == [
            "Ocean Cleanup",
            "Fund the cleanup",
            "",
            "",
            1_700_000_000,
            1_700_086_400,
            5,
            1,
            3,
            True,
        ]

    def test_name_is_trimmed(self):
        assert campaign_input(name="  Reef  ").validate().name == "Reef"

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"name": "   "}, "name"),
            ({"end_time": 1_700_000_000}, "end_time"),
            ({"start_time": -5}, "start_time"),
            ({"admin_fee_percentage": 31}, "admin_fee_percentage"),
            ({"vote_multiplier": 0}, "vote_multiplier"),
            ({"max_winners": -1}, "max_winners"),
        ],
    )
    def test_rejects_invalid_fields(self, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            campaign_input(**overrides).validate()
        assert exc_info.value.field == field

    def test_validation_error_is_not_retryable(self):
        with pytest.raises(NonRetryableException):
            campaign_input(name="").validate()

    def test_update_input_args(self):
        update = CampaignUpdateInput(
            campaign_id=2,
            name="Reef",
            description="",
            start_time=10,
            end_time=20,
            admin_fee_percentage=0,
        ).validate()

        assert update.to_args()[:2] == [2, "Reef"]
        assert len(update.to_args()) == 8


class TestProjectInput:
    def test_contract_addresses_are_checksummed(self):
        project = ProjectInput(
            campaign_id=1,
            name="Buoy",
            description="Smart buoys",
            contracts=["0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"],
        ).validate()

        assert project.contracts == [
            to_checksum_address("0xabcdefabcdefabcdefabcdefabcdefabcdefabcd")
        ]
        assert project.to_args()[0] == 1
        assert len(project.to_args()) == 9

    def test_bad_contract_address_names_its_index(self):
        with pytest.raises(ValidationError) as exc_info:
            ProjectInput(
                campaign_id=1,
                name="Buoy",
                description="",
                contracts=[
                    "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd",
                    "0xnope",
                ],
            ).validate()
        assert exc_info.value.field == "contracts[1]"

    def test_update_includes_project_id(self):
        update = ProjectUpdateInput(
            campaign_id=1, name="Buoy", description="", project_id=4
        ).validate()

        assert update.to_args()[:3] == [1, 4, "Buoy"]

    def test_update_requires_project_id(self):
        with pytest.raises(TypeError):
            ProjectUpdateInput(campaign_id=1, name="Buoy", description="")


class TestVoteInput:
    def test_amount_becomes_decimal(self):
        vote = VoteInput(campaign_id=0, project_id=1, amount="1.5").validate()
        assert vote.amount == Decimal("1.5")

    @pytest.mark.parametrize("amount", [0, "-1", "abc", "NaN", "Infinity"])
    def test_rejects_non_positive_or_invalid_amounts(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            VoteInput(campaign_id=0, project_id=1, amount=amount).validate()
        assert exc_info.value.field == "amount"

    @pytest.mark.parametrize(
        "amount", ["0.0000000000000000001", "1.1234567890123456789"]
    )
    def test_rejects_amounts_finer_than_one_base_unit(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            VoteInput(campaign_id=0, project_id=1, amount=amount).validate()
        assert exc_info.value.field == "amount"

    @pytest.mark.parametrize(
        "amount", ["0.000000000000000001", "1.50000000000000000000"]
    )
    def test_accepts_whole_base_units(self, amount):
        vote = VoteInput(campaign_id=0, project_id=1, amount=amount).validate()
        assert vote.amount == Decimal(amount)

    def test_rejects_bool_ids(self):
        with pytest.raises(ValidationError):
            VoteInput(campaign_id=True, project_id=1, amount=1).validate()


def test_positive_amount_accepts_int_and_decimal():
    assert validate_positive_amount(2) == Decimal(2)
    assert validate_positive_amount(Decimal("0.1")) == Decimal("0.1")
