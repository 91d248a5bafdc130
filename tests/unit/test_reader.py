"""
Unit tests for decoding contract return values and receipts.
"""

from eth_abi import encode
from eth_utils import to_checksum_address

from seas_toolkit.contracts.reader import (
    CAMPAIGN_CREATED_SIGNATURE,
    ContractReader,
    event_topic,
)

CONTRACT = "0x1111111111111111111111111111111111111111"
OTHER_CONTRACT = "0x9999999999999999999999999999999999999999"


def uint_topic(value: int) -> bytes:
    return encode(["uint256"], [value])


class TestDecodeRecords:
    def test_decode_campaign(self, campaign_factory):
        campaign = ContractReader.decode_campaign(
            campaign_factory(campaign_id=4, total_funds=10**18, quadratic=True)
        )

        assert campaign.id == 4
        assert campaign.total_funds == 10**18
        assert campaign.use_quadratic_distribution is True
        assert campaign.admin_fee_percentage == 5
        assert campaign.end_time > campaign.start_time

    def test_decode_project_checksums_addresses(self, project_factory):
        raw = list(project_factory(2, vote_count=7, funds_received=3))
        raw[2] = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
        raw[10] = ["0xabcdefabcdefabcdefabcdefabcdefabcdefabce"]

        project = ContractReader.decode_project(raw)

        assert project.owner == to_checksum_address(raw[2])
        assert project.contracts == [to_checksum_address(raw[10][0])]
        assert project.vote_count == 7
        assert project.funds_received == 3
        assert project.approved is True

    def test_decode_votes(self):
        votes = ContractReader.decode_votes(
            [
                (
                    "0x5555555555555555555555555555555555555555",
                    1,
                    2,
                    10**18,
                    2 * 10**18,
                )
            ]
        )

        assert len(votes) == 1
        assert votes[0].campaign_id == 1
        assert votes[0].vote_count == 2 * votes[0].amount


class TestExtractCampaignId:
    def test_reads_campaign_created_event(self):
        receipt = {
            "logs": [
                {
                    "address": CONTRACT,
                    "topics": [
                        event_topic(CAMPAIGN_CREATED_SIGNATURE),
                        uint_topic(12),
                        uint_topic(0),
                    ],
                }
            ]
        }

        assert ContractReader.extract_campaign_id(receipt, CONTRACT) == 12

    def test_ignores_logs_from_other_contracts(self):
        receipt = {
            "logs": [
                {
                    "address": OTHER_CONTRACT,
                    "topics": [
                        event_topic(CAMPAIGN_CREATED_SIGNATURE),
                        uint_topic(99),
                    ],
                },
                {
                    "address": CONTRACT,
                    "topics": [
                        event_topic(CAMPAIGN_CREATED_SIGNATURE),
                        uint_topic(3),
                    ],
                },
            ]
        }

        assert ContractReader.extract_campaign_id(receipt, CONTRACT) == 3

    def test_falls_back_to_last_log_topic(self):
        receipt = {
            "logs": [
                {"address": CONTRACT, "topics": [b"\x01" * 32, uint_topic(8)]}
            ]
        }

        assert ContractReader.extract_campaign_id(receipt) == 8

    def test_implausible_fallback_id_is_rejected(self):
        receipt = {
            "logs": [
                {
                    "address": CONTRACT,
                    "topics": [b"\x01" * 32, uint_topic(2**200)],
                }
            ]
        }

        assert ContractReader.extract_campaign_id(receipt) is None

    def test_receipt_without_logs(self):
        assert ContractReader.extract_campaign_id({"logs": []}) is None
        assert ContractReader.extract_campaign_id({}) is None
