"""
prism_neo.billing.wallet

Wallet and held-item reports.

Responsibilities:
- Summarize balances, locked credit, the soonest-expiring free grant, passes and tickets.
- List every held asset for the items command.
"""

from __future__ import annotations

from datetime import tzinfo

from prism_neo import messages
from prism_neo.billing.formatting import format_datetime
from prism_neo.space_api.models import UserAsset, Wallet


def asset_name(holding: UserAsset) -> str:
    return holding.name or messages.UNKNOWN_ASSET


def soonest_expiring(holdings: list[UserAsset]) -> UserAsset | None:
    """Earliest `expire_at` among holdings that expire at all; ties keep list order."""
    expiring = [h for h in holdings if h.expire_at is not None]
    if not expiring:
        return None
    # min() returns the first of equal keys.
    return min(expiring, key=lambda h: h.expire_at)


def render_wallet(wallet: Wallet, *, target_user: str | None = None, tz: tzinfo | None = None) -> str:
    lines: list[str] = [
        messages.WALLET_HEADER_OTHER.format(user_id=target_user)
        if target_user
        else messages.WALLET_HEADER_SELF,
        messages.WALLET_AVAILABLE.format(available=wallet.total.available, all=wallet.total.all),
        messages.WALLET_PAID.format(amount=wallet.paid.available),
        messages.WALLET_FREE.format(amount=wallet.free.available),
    ]

    if wallet.locked > 0:
        lines.append("")
        lines.append(messages.WALLET_LOCKED.format(amount=wallet.locked))

    expiring = soonest_expiring(wallet.free.available_assets)
    if expiring is not None:
        lines.append("")
        lines.append(
            messages.WALLET_EXPIRING.format(
                count=expiring.count, time=format_datetime(expiring.expire_at, tz)
            )
        )

    passes = wallet.passes.available_assets
    if passes:
        lines.append("")
        lines.append(messages.WALLET_PASSES.format(count=len(passes)))
        for held in passes:
            lines.append(messages.ASSET_NAME.format(name=asset_name(held)))
            lines.append(messages.ASSET_EXPIRY.format(time=format_datetime(held.expire_at, tz)))

    tickets = wallet.tickets.available_assets
    if tickets:
        lines.append("")
        lines.append(messages.WALLET_TICKETS.format(count=len(tickets)))
        for held in tickets:
            lines.append(messages.ASSET_NAME_COUNT.format(name=asset_name(held), count=held.count))
            lines.append(messages.ASSET_EXPIRY.format(time=format_datetime(held.expire_at, tz)))

    return "\n".join(lines)


def render_items(
    holdings: list[UserAsset], *, target_user: str | None = None, tz: tzinfo | None = None
) -> str:
    if not holdings:
        if target_user:
            return messages.ITEMS_EMPTY_OTHER.format(user_id=target_user)
        return messages.ITEMS_EMPTY_SELF

    lines = [
        messages.ITEMS_HEADER_OTHER.format(user_id=target_user)
        if target_user
        else messages.ITEMS_HEADER_SELF
    ]
    for held in holdings:
        lines.append(messages.ASSET_NAME_COUNT.format(name=asset_name(held), count=held.count))
        if held.expire_at is not None:
            lines.append(messages.ASSET_EXPIRY.format(time=format_datetime(held.expire_at, tz)))
    return "\n".join(lines)
