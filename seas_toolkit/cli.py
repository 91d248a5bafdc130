#!/usr/bin/env python3
"""
Unified CLI for Sovereign Seas Toolkit.

Configuration comes from the environment (or a .env file), see SeasConfig.

Examples:
  - Campaigns
    seas campaigns-list
    seas campaign-show --campaign-id 3

  - Distribution
    seas distribution-preview --campaign-id 3
    seas distribution-actual --campaign-id 3 --json

  - Voters
    seas user-votes --user 0x...
    seas verify-wallet --wallet 0x...
"""

import argparse
import asyncio
from typing import Any, Dict, List, Optional

from rich.table import Table

from seas_toolkit.campaigns.aggregator import derive_status
from seas_toolkit.contracts.validation import validate_address
from seas_toolkit.distribution.models import DistributionResult
from seas_toolkit.session import SeasSession
from seas_toolkit.shared.services.http_client import aclose_async_client
from seas_toolkit.utils.formatters import (
    console,
    format_address,
    format_timestamp,
    format_token_amount,
    save_json_output,
)


def _emit_json(args: argparse.Namespace, data: Any) -> bool:
    """Print or save JSON when requested; True if the command is done."""
    if args.output:
        save_json_output(data, args.output)
        return True
    if args.json:
        console.print_json(data=data, default=str)
        return True
    return False


def _distribution_table(title: str, result: DistributionResult) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Rank", style="cyan")
    table.add_column("Project", style="white")
    table.add_column("Votes", style="yellow")
    table.add_column("Weight", style="yellow")
    table.add_column("Share", style="green")
    table.add_column("Winner", style="magenta")
    for a in result.allocations:
        table.add_row(
            str(a.rank),
            str(a.project_id),
            format_token_amount(a.vote_count),
            str(a.weight),
            format_token_amount(a.funds_share),
            "yes" if a.is_winner else "",
        )
    return table


def _print_fee_summary(result: DistributionResult) -> None:
    console.print(f"Total funds: {format_token_amount(result.total_funds)}")
    console.print(f"Platform fee: {format_token_amount(result.platform_fee)}")
    console.print(f"Admin fee: {format_token_amount(result.admin_fee)}")
    console.print(
        f"Distributable: {format_token_amount(result.distributable_funds)}"
    )
    if result.unallocated_remainder:
        console.print(
            f"[yellow]Unallocated remainder: "
            f"{result.unallocated_remainder} base units[/yellow]"
        )


def cmd_campaigns_list(args: argparse.Namespace) -> None:
    async def run():
        session = SeasSession.from_env()
        campaigns = await session.campaigns.list_campaigns()

        rows: List[Dict[str, Any]] = []
        for c in campaigns:
            row = c.to_dict()
            row["status"] = derive_status(c).value
            rows.append(row)
        if _emit_json(args, rows):
            return

        table = Table(
            title=f"Campaigns ({len(campaigns)})",
            show_header=True,
            header_style="bold",
        )
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Admin", style="white")
        table.add_column("Start", style="green")
        table.add_column("End", style="red")
        table.add_column("Funds", style="yellow")
        table.add_column("Status", style="magenta")
        for c, row in zip(campaigns, rows):
            table.add_row(
                str(c.id),
                c.name,
                format_address(c.admin),
                format_timestamp(c.start_time),
                format_timestamp(c.end_time),
                format_token_amount(c.total_funds),
                row["status"],
            )
        console.print(table)

    asyncio.run(run())


def cmd_campaign_show(args: argparse.Namespace) -> None:
    async def run():
        session = SeasSession.from_env()
        overview = await session.campaigns.get_campaign_overview(
            args.campaign_id
        )
        if overview is None:
            console.print(f"[red]Campaign #{args.campaign_id} not found[/red]")
            return
        if _emit_json(args, overview.to_dict()):
            return

        c = overview.campaign
        t = overview.time_remaining
        console.print(f"[bold]Campaign #{c.id} - {c.name}[/bold]")
        console.print(f"Status: {overview.status.value}")
        console.print(f"Time remaining: {t.days}d {t.hours}h {t.minutes}m")
        console.print(
            f"Projects: {overview.stats.total} "
            f"({overview.stats.approved} approved, "
            f"{overview.stats.pending} pending)"
        )
        console.print(f"Total votes: {overview.stats.total_votes}")
        console.print(
            f"Distribution: "
            f"{'quadratic' if c.use_quadratic_distribution else 'linear'}, "
            f"max winners {c.max_winners or 'unlimited'}"
        )

    asyncio.run(run())


def cmd_distribution_preview(args: argparse.Namespace) -> None:
    async def run():
        session = SeasSession.from_env()
        result = await session.campaigns.get_distribution_preview(
            args.campaign_id
        )
        if result is None:
            console.print(f"[red]Campaign #{args.campaign_id} not found[/red]")
            return
        if _emit_json(args, result.to_dict()):
            return

        console.print(
            _distribution_table(
                f"Projected distribution for campaign #{args.campaign_id}",
                result,
            )
        )
        _print_fee_summary(result)

    asyncio.run(run())


def cmd_distribution_actual(args: argparse.Namespace) -> None:
    async def run():
        session = SeasSession.from_env()
        rec = await session.campaigns.get_distribution_reconciliation(
            args.campaign_id
        )
        if rec is None:
            console.print(f"[red]Campaign #{args.campaign_id} not found[/red]")
            return

        data = {
            "campaign_id": rec.campaign_id,
            "matches": rec.matches,
            "total_paid": rec.total_paid,
            "result": rec.result.to_dict(),
            "rows": [
                {
                    "rank": r.rank,
                    "project_id": r.project_id,
                    "expected": r.expected,
                    "actual": r.actual,
                    "delta": r.delta,
                }
                for r in rec.rows
            ],
        }
        if _emit_json(args, data):
            return

        table = Table(
            title=f"Distribution of campaign #{rec.campaign_id}",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Rank", style="cyan")
        table.add_column("Project", style="white")
        table.add_column("Expected", style="yellow")
        table.add_column("Received", style="green")
        table.add_column("Delta", style="red")
        for r in rec.rows:
            table.add_row(
                str(r.rank),
                str(r.project_id),
                format_token_amount(r.expected),
                format_token_amount(r.actual),
                str(r.delta),
            )
        console.print(table)
        _print_fee_summary(rec.result)
        if rec.matches:
            console.print("[green]✓ Payouts match the computed distribution[/green]")
        else:
            console.print("[red]✗ Payouts differ from the computed distribution[/red]")

    asyncio.run(run())


def cmd_user_votes(args: argparse.Namespace) -> None:
    user = validate_address(args.user, "user")

    async def run():
        session = SeasSession.from_env()
        leaderboard = await session.campaigns.get_user_leaderboard(user)

        rows = [
            {
                "campaign_id": s.campaign_id,
                "campaign_name": s.campaign_name,
                "total_amount": s.total_amount,
                "total_vote_count": s.total_vote_count,
                "vote_records": s.vote_records,
            }
            for s in leaderboard
        ]
        if _emit_json(args, rows):
            return

        if not leaderboard:
            console.print(f"No votes found for {format_address(user)}")
            return

        table = Table(
            title=f"Campaigns supported by {format_address(user)}",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Campaign", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Amount", style="green")
        table.add_column("Votes", style="yellow")
        table.add_column("Records", style="white")
        for s in leaderboard:
            table.add_row(
                str(s.campaign_id),
                s.campaign_name or "N/A",
                format_token_amount(s.total_amount),
                format_token_amount(s.total_vote_count),
                str(s.vote_records),
            )
        console.print(table)

    asyncio.run(run())


def cmd_verify_wallet(args: argparse.Namespace) -> None:
    wallet = validate_address(args.wallet, "wallet")

    async def run():
        session = SeasSession.from_env()
        try:
            result = await session.verification.fetch_verification_data(wallet)
        finally:
            await aclose_async_client()

        if not result.success:
            console.print(
                f"[red]Verification lookup failed "
                f"(status {result.status}):[/red] {result.error}"
            )
            return
        if _emit_json(args, result.data):
            return
        console.print(f"[bold]Verification for {format_address(wallet)}[/bold]")
        console.print_json(data=result.data, default=str)

    asyncio.run(run())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seas",
        description="Unified CLI for Sovereign Seas Toolkit",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # campaigns-list
    p_cl = sub.add_parser("campaigns-list", help="List all campaigns")
    p_cl.add_argument("--json", action="store_true", help="Output JSON")
    p_cl.add_argument("--output", type=str, help="Output filename")
    p_cl.set_defaults(func=cmd_campaigns_list)

    # campaign-show
    p_cs = sub.add_parser(
        "campaign-show", help="Show status, time left and project stats"
    )
    p_cs.add_argument("--campaign-id", type=int, required=True)
    p_cs.add_argument("--json", action="store_true", help="Output JSON")
    p_cs.add_argument("--output", type=str, help="Output filename")
    p_cs.set_defaults(func=cmd_campaign_show)

    # distribution-preview
    p_dp = sub.add_parser(
        "distribution-preview",
        help="Projected payout from the current votes",
    )
    p_dp.add_argument("--campaign-id", type=int, required=True)
    p_dp.add_argument("--json", action="store_true", help="Output JSON")
    p_dp.add_argument("--output", type=str, help="Output filename")
    p_dp.set_defaults(func=cmd_distribution_preview)

    # distribution-actual
    p_da = sub.add_parser(
        "distribution-actual",
        help="Compare recorded payouts with the computed distribution",
    )
    p_da.add_argument("--campaign-id", type=int, required=True)
    p_da.add_argument("--json", action="store_true", help="Output JSON")
    p_da.add_argument("--output", type=str, help="Output filename")
    p_da.set_defaults(func=cmd_distribution_actual)

    # user-votes
    p_uv = sub.add_parser(
        "user-votes", help="Campaigns a voter supported, largest first"
    )
    p_uv.add_argument("--user", type=str, required=True)
    p_uv.add_argument("--json", action="store_true", help="Output JSON")
    p_uv.add_argument("--output", type=str, help="Output filename")
    p_uv.set_defaults(func=cmd_user_votes)

    # verify-wallet
    p_vw = sub.add_parser(
        "verify-wallet", help="Fetch the verification record of a wallet"
    )
    p_vw.add_argument("--wallet", type=str, required=True)
    p_vw.add_argument("--json", action="store_true", help="Output JSON")
    p_vw.add_argument("--output", type=str, help="Output filename")
    p_vw.set_defaults(func=cmd_verify_wallet)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except Exception as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise


if __name__ == "__main__":
    main()
