from __future__ import annotations

from datetime import UTC

from payloads import billing_payload, holding, logout_payload, segment, wallet_payload

from prism_neo.billing.report import (
    billable_segments,
    final_cost,
    original_cost,
    render_preview,
    render_receipt,
)
from prism_neo.space_api.models import BillingPreview, LogoutResult

DISCOUNT = {
    "originalCost": 100,
    "finalCost": 80,
    "appliedLogs": [{"asset": "Weekday ticket", "saved": 20}],
}


def _preview(**kwargs) -> BillingPreview:
    return BillingPreview.model_validate(billing_payload(**kwargs))


def test_cost_overwrite_beats_discount_and_total() -> None:
    assert final_cost(_preview(total_cost=100, discount=DISCOUNT, cost_overwrite=50)) == 50


def test_discount_beats_total() -> None:
    assert final_cost(_preview(total_cost=100, discount=DISCOUNT)) == 80


def test_total_is_used_without_discount_or_overwrite() -> None:
    assert final_cost(_preview(total_cost=100)) == 100


def test_zero_overwrite_is_still_an_override() -> None:
    assert final_cost(_preview(total_cost=100, discount=DISCOUNT, cost_overwrite=0)) == 0


def test_fractional_costs_are_accepted() -> None:
    preview = _preview(total_cost=12.5)

    assert final_cost(preview) == 12.5
    text = render_preview(preview, tz=UTC)
    assert "结算价: 12.5 月饼" in text
    assert "扣款后: 487.5 月饼" in text


def test_original_cost_prefers_discount_figure() -> None:
    assert original_cost(_preview(total_cost=90, discount=DISCOUNT)) == 100
    assert original_cost(_preview(total_cost=90)) == 90


def test_negative_segments_are_dropped() -> None:
    preview = _preview(
        segments=[
            segment("Adjustment", "2025-01-15T10:00:00Z", "2025-01-15T11:00:00Z", -5),
            segment("Daytime", "2025-01-15T11:00:00Z", "2025-01-15T12:00:00Z", 10),
        ]
    )
    assert [s.rule_name for s in billable_segments(preview.billing.segments)] == ["Daytime"]

    text = render_preview(preview, tz=UTC)
    assert "Daytime" in text
    assert "Adjustment" not in text


def test_preview_lines_in_order() -> None:
    preview = _preview(
        total_cost=100,
        discount=DISCOUNT,
        segments=[
            segment("Daytime", "2025-01-15T10:00:00Z", "2025-01-15T12:00:00Z", 60),
            segment("Night", "2025-01-15T22:00:00Z", "2025-01-16T02:00:00Z", 40, capped=True),
        ],
        wallet=wallet_payload(available=500),
    )

    assert render_preview(preview, tz=UTC).split("\n") == [
        "--- 账单详情 ---",
        "入场: 2025/01/15 10:00:00",
        "结算: 2025/01/15 13:30:00",
        "---",
        "计费价: 100 月饼",
        "  -「Weekday ticket」: -20 月饼",
        "结算价: 80 月饼",
        "---",
        "当前余额: 500 月饼",
        "扣款后: 420 月饼",
        "---",
        "计费区间:",
        "- Daytime",
        "  时段: 10:00 - 12:00",
        "  费用: 60 月饼",
        "- Night",
        "  时段: 1/15 22:00 - 1/16 02:00",
        "  费用: 40 月饼 (已封顶)",
    ]


def test_preview_projects_balance_with_overwrite() -> None:
    text = render_preview(
        _preview(total_cost=100, cost_overwrite=30, wallet=wallet_payload(available=20)), tz=UTC
    )
    assert "结算价: 30 月饼" in text
    assert "扣款后: -10 月饼" in text


def test_preview_without_segments_says_none() -> None:
    text = render_preview(_preview(segments=[]), tz=UTC)
    assert text.endswith("计费区间:\n  (无)")


def test_preview_mentions_monthly_pass_expiry() -> None:
    wallet = wallet_payload(passes=[holding("Monthly pass", expire_at="2025-02-01T00:00:00Z")])
    text = render_preview(_preview(wallet=wallet), tz=UTC)
    assert text.endswith("---\n您的月卡将于 2025/02/01 00:00:00 到期。")


def test_preview_skips_pass_without_expiry() -> None:
    wallet = wallet_payload(passes=[holding("Lifetime pass")])
    assert "月卡" not in render_preview(_preview(wallet=wallet), tz=UTC)


def test_receipt_for_self_and_for_other() -> None:
    result = LogoutResult.model_validate(logout_payload(final_cost=80))

    assert render_receipt(result, tz=UTC).split("\n") == [
        "✅ 退场成功",
        "入场时间: 2025/01/15 10:00:00",
        "离场时间: 2025/01/15 13:30:00",
        "消费: 80 月饼",
    ]
    assert render_receipt(result, target_user="42", tz=UTC).startswith("✅ 已为用户 42 退场\n")
