from typing import Any, Dict, List, Mapping, Optional, Sequence

from eth_abi import decode
from eth_utils import keccak, to_checksum_address
from hexbytes import HexBytes

from seas_toolkit.campaigns.models import Campaign, Project, Vote

CAMPAIGN_CREATED_SIGNATURE = "CampaignCreated(uint256,address,string)"

# Campaign ids above this are treated as a mis-parsed topic, not an id
MAX_PLAUSIBLE_ID = 1_000_000


def event_topic(signature: str) -> HexBytes:
    return HexBytes(keccak(text=signature))


class ContractReader:
    """
    Decodes raw contract return values into toolkit models.

    web3 returns multi-value outputs and structs as positional tuples; the
    field order below follows the contract's declaration order.
    """

    @staticmethod
    def decode_campaign(result: Sequence[Any]) -> Campaign:
        """
        Decode the 14 values returned by ``getCampaign``.
        """
        return Campaign(
            id=int(result[0]),
            admin=to_checksum_address(result[1]),
            name=result[2],
            description=result[3],
            logo=result[4],
            demo_video=result[5],
            start_time=int(result[6]),
            end_time=int(result[7]),
            admin_fee_percentage=int(result[8]),
            vote_multiplier=int(result[9]),
            max_winners=int(result[10]),
            use_quadratic_distribution=bool(result[11]),
            active=bool(result[12]),
            total_funds=int(result[13]),
        )

    @staticmethod
    def decode_project(result: Sequence[Any]) -> Project:
        """
        Decode a Project struct (``getProject`` or one ``getSortedProjects`` item).
        """
        return Project(
            id=int(result[0]),
            campaign_id=int(result[1]),
            owner=to_checksum_address(result[2]),
            name=result[3],
            description=result[4],
            github_link=result[5],
            social_link=result[6],
            testing_link=result[7],
            logo=result[8],
            demo_video=result[9],
            contracts=[to_checksum_address(a) for a in result[10]],
            approved=bool(result[11]),
            vote_count=int(result[12]),
            funds_received=int(result[13]),
        )

    @staticmethod
    def decode_vote(result: Sequence[Any]) -> Vote:
        return Vote(
            voter=to_checksum_address(result[0]),
            campaign_id=int(result[1]),
            project_id=int(result[2]),
            amount=int(result[3]),
            vote_count=int(result[4]),
        )

    @classmethod
    def decode_projects(cls, results: Sequence[Sequence[Any]]) -> List[Project]:
        return [cls.decode_project(r) for r in results]

    @classmethod
    def decode_votes(cls, results: Sequence[Sequence[Any]]) -> List[Vote]:
        return [cls.decode_vote(r) for r in results]

    @staticmethod
    def decode_indexed_uint(topic: Any) -> int:
        """Decode an indexed uint256 event topic."""
        return decode(["uint256"], bytes(HexBytes(topic)))[0]

    @classmethod
    def extract_campaign_id(
        cls,
        receipt: Mapping[str, Any],
        contract_address: Optional[str] = None,
    ) -> Optional[int]:
        """
        Campaign id emitted by ``createCampaign``.

        Looks for the CampaignCreated event first. Receipts from contract
        versions with a different event layout fall back to the first
        indexed topic of the last log.
        """
        logs: List[Dict[str, Any]] = list(receipt.get("logs") or [])
        expected_topic = event_topic(CAMPAIGN_CREATED_SIGNATURE)

        for log in logs:
            topics = log.get("topics") or []
            if contract_address and log.get("address"):
                if log["address"].lower() != contract_address.lower():
                    continue
            if len(topics) > 1 and HexBytes(topics[0]) == expected_topic:
                return cls.decode_indexed_uint(topics[1])

        if logs:
            topics = logs[-1].get("topics") or []
            if len(topics) > 1:
                candidate = cls.decode_indexed_uint(topics[1])
                if candidate < MAX_PLAUSIBLE_ID:
                    return candidate

        return None
