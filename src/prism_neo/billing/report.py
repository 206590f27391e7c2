"""
prism_neo.billing.report

Billing preview and logout receipt rendering.

Responsibilities:
- Resolve the amount that will be (or was) charged.
- Assemble the preview shown before a logout is confirmed.
- Assemble the receipt shown after the remote logout succeeded.
"""

from __future__ import annotations

from datetime import tzinfo

from prism_neo import messages
from prism_neo.billing.formatting import format_datetime, format_time_range
from prism_neo.space_api.models import Amount, BillingPreview, BillingSegment, LogoutResult, Wallet


def original_cost(preview: BillingPreview) -> Amount:
    if preview.discount is not None:
        return preview.discount.original_cost
    return preview.billing.total_cost


def final_cost(preview: BillingPreview) -> Amount:
    """Admin override > discounted cost > raw segment total."""
    if preview.session.cost_overwrite is not None:
        return preview.session.cost_overwrite
    if preview.discount is not None:
        return preview.discount.final_cost
    return preview.billing.total_cost


def billable_segments(segments: list[BillingSegment]) -> list[BillingSegment]:
    # Negative segments are accounting adjustments, not billable time.
    return [seg for seg in segments if seg.cost >= 0]


def _render_segment(seg: BillingSegment, tz: tzinfo | None) -> list[str]:
    cost = messages.SEGMENT_COST.format(cost=seg.cost)
    if seg.is_capped:
        cost += messages.SEGMENT_CAPPED
    return [
        messages.SEGMENT_RULE.format(rule=seg.rule_name),
        messages.SEGMENT_RANGE.format(range=format_time_range(seg.start_time, seg.end_time, tz)),
        cost,
    ]


def _active_pass_expiry_line(wallet: Wallet, tz: tzinfo | None) -> str | None:
    passes = wallet.passes.available_assets
    if not passes or passes[0].expire_at is None:
        return None
    return messages.PASS_EXPIRY.format(time=format_datetime(passes[0].expire_at, tz))


def render_preview(preview: BillingPreview, *, tz: tzinfo | None = None) -> str:
    charged = final_cost(preview)
    lines: list[str] = [messages.BILLING_HEADER]

    lines.append(messages.BILLING_OPENED.format(time=format_datetime(preview.session.created_at, tz)))
    lines.append(messages.BILLING_CLOSING.format(time=format_datetime(preview.billing.end_time, tz)))
    lines.append(messages.SECTION_BREAK)

    lines.append(messages.BILLING_ORIGINAL_COST.format(cost=original_cost(preview)))
    if preview.discount is not None:
        for applied in preview.discount.applied_logs:
            lines.append(messages.BILLING_DISCOUNT_LINE.format(asset=applied.asset, saved=applied.saved))
    lines.append(messages.BILLING_FINAL_COST.format(cost=charged))
    lines.append(messages.SECTION_BREAK)

    balance = preview.wallet.total.available
    lines.append(messages.BILLING_BALANCE.format(balance=balance))
    lines.append(messages.BILLING_BALANCE_AFTER.format(balance=balance - charged))
    lines.append(messages.SECTION_BREAK)

    lines.append(messages.BILLING_SEGMENTS)
    segments = billable_segments(preview.billing.segments)
    if segments:
        for seg in segments:
            lines.extend(_render_segment(seg, tz))
    else:
        lines.append(messages.BILLING_NO_SEGMENTS)

    pass_line = _active_pass_expiry_line(preview.wallet, tz)
    if pass_line is not None:
        lines.append(messages.SECTION_BREAK)
        lines.append(pass_line)

    return "\n".join(lines)


def charged_amount(result: LogoutResult) -> Amount:
    session = result.session
    if session.final_cost is not None:
        return session.final_cost
    if session.cost_overwrite is not None:
        return session.cost_overwrite
    return result.billing.get("totalCost", 0)


def render_receipt(result: LogoutResult, *, target_user: str | None = None, tz: tzinfo | None = None) -> str:
    session = result.session
    header = (
        messages.LOGOUT_DONE_OTHER.format(user_id=target_user)
        if target_user
        else messages.LOGOUT_DONE_SELF
    )
    return "\n".join(
        [
            header,
            messages.RECEIPT_OPENED.format(time=format_datetime(session.created_at, tz)),
            messages.RECEIPT_CLOSED.format(time=format_datetime(session.closed_at, tz)),
            messages.RECEIPT_CHARGED.format(cost=charged_amount(result)),
        ]
    )


# --- Module Notes -----------------------------------------------------------
# The receipt has no segment or discount detail: the logout call only returns the closed
# session, so anything richer would have to be fetched before closing.
