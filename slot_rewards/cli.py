"""Command-line queries against the reward engine.

Usage:
    python -m slot_rewards.cli reward 9197117
    python -m slot_rewards.cli reward --block 19992375
    python -m slot_rewards.cli syncduties 9197117
"""

import argparse
from asyncio import run
import sys

from rich.console import Console
from rich.table import Table

from slot_rewards.analysis.models import RewardResult
from slot_rewards.data.builders.registry import BuilderRegistryError
from slot_rewards.helpers.config import load_settings
from slot_rewards.helpers.constants import WEI_PER_GWEI
from slot_rewards.helpers.errors import ClientError, UpstreamError, parse_slot
from slot_rewards.helpers.parsers import wei_to_eth
from slot_rewards.services import Services, build_services


console = Console()


def _display_reward(title: str, result: RewardResult) -> None:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Gwei", justify="right", style="yellow")
    table.add_column("ETH", justify="right", style="green")

    table.add_row(
        "Block reward",
        f"{result.block_reward:,}",
        f"{wei_to_eth(result.block_reward * WEI_PER_GWEI):.6f}",
    )
    table.add_row(
        "MEV reward",
        f"{result.mev_reward:,}",
        f"{wei_to_eth(result.mev_reward * WEI_PER_GWEI):.6f}",
    )
    table.add_row("MEV block", "yes" if result.mev else "no", "")

    console.print(table)
    if result.failed_receipts:
        console.print(
            f"[yellow]{result.failed_receipts} receipts could not be fetched; "
            "block reward is understated[/yellow]"
        )


async def _reward(services: Services, args: argparse.Namespace) -> int:
    client = services.http_client
    if args.block is not None:
        result = await services.rewards.reward_for_block_number(client, args.block)
        _display_reward(f"Block {args.block:,}", result)
        return 0

    slot = parse_slot(args.slot)
    await services.resolver.ensure_not_future(client, slot)
    outcome = await services.rewards.reward_for_slot(client, slot)
    if outcome.not_found:
        console.print(f"[yellow]Slot {slot:,} does not exist or was skipped[/yellow]")
        return 1
    _display_reward(f"Slot {slot:,}", outcome.result)
    return 0


async def _sync_duties(services: Services, args: argparse.Namespace) -> int:
    client = services.http_client
    slot = parse_slot(args.slot)
    await services.resolver.ensure_not_future(client, slot)
    pubkeys = await services.committees.sync_duty_pubkeys(client, slot)

    console.print(f"[bold blue]{len(pubkeys)} sync-committee members at slot {slot:,}[/bold blue]")
    for pubkey in pubkeys:
        console.print(pubkey)
    return 0


async def _main(args: argparse.Namespace) -> int:
    services = build_services(load_settings())
    try:
        if args.command == "reward":
            return await _reward(services, args)
        return await _sync_duties(services, args)
    finally:
        await services.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slot-rewards",
        description="Query block rewards and sync-committee duties",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reward = subparsers.add_parser("reward", help="Block reward for a slot or block")
    target = reward.add_mutually_exclusive_group(required=True)
    target.add_argument("slot", nargs="?", help="Beacon chain slot")
    target.add_argument("--block", type=int, help="Execution block number instead of a slot")

    duties = subparsers.add_parser("syncduties", help="Sync-committee members for a slot")
    duties.add_argument("slot", help="Beacon chain slot")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(_main(args))
    except (ClientError, ValueError, BuilderRegistryError) as e:
        console.print(f"[red]{e}[/red]")
        return 2
    except UpstreamError as e:
        console.print(f"[red]Upstream failure: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
