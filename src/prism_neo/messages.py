"""
prism_neo.messages

User-facing text (Simplified Chinese).

Responsibilities:
- Keep every string a chat member can see in one place.
- Name templates by what they render, with `str.format` placeholders.
"""

from __future__ import annotations

CURRENCY = "月饼"

# --- generic / errors ------------------------------------------------------
GENERIC_FAILURE = "操作失败，发生了未知错误。"
INSUFFICIENT_PRIVILEGE = "权限不足"
UNKNOWN_COMMAND = "未知指令: {command}"
MISSING_USER = "请指定用户"
MISSING_AMOUNT = "请输入数量"
INVALID_AMOUNT = "数量必须是整数"
MISSING_ALIAS = "请输入设备名"
MISSING_CODE = "请输入兑换码"
QUOTE_MARKER = '<quote id="{message_id}"/>'

# --- timestamps ------------------------------------------------------------
NEVER_EXPIRES = "永不过期"

# --- register / login / lock -----------------------------------------------
REGISTERED_SELF = "注册成功"
REGISTERED_OTHER = "为用户 {user_id} 注册成功"
LOGIN_SELF = "✅ 入场成功，你的门锁密码是: {password}"
LOGIN_OTHER = "✅ 已为用户 {user_id} 入场，该用户的门锁密码是: {password}"
DOOR_CODE_VALIDITY = "注意! 门锁密码有效期为三分钟"
LOCK_HEADER = "获取密码成功"
LOCK_PASSWORD = "你的门锁密码是: {password}"

# --- logout ----------------------------------------------------------------
LOGOUT_DONE_SELF = "✅ 退场成功"
LOGOUT_DONE_OTHER = "✅ 已为用户 {user_id} 退场"
RECEIPT_OPENED = "入场时间: {time}"
RECEIPT_CLOSED = "离场时间: {time}"
RECEIPT_CHARGED = "消费: {cost} " + CURRENCY
PREVIEW_FOR_OTHER = "以下是用户 {user_id} 的账单预览:"
CONFIRM_PROMPT_SELF = "⚠️ 这是您的账单预览。请在{seconds}秒内再次输入 /logout 以确认登出。"
CONFIRM_PROMPT_OTHER = "⚠️ 请在{seconds}秒内再次输入 /logout {user} 以确认登出。"

# --- billing report --------------------------------------------------------
SECTION_BREAK = "---"
BILLING_HEADER = "--- 账单详情 ---"
BILLING_FOR_OTHER = "用户 {user_id} 的账单:"
BILLING_OPENED = "入场: {time}"
BILLING_CLOSING = "结算: {time}"
BILLING_ORIGINAL_COST = "计费价: {cost} " + CURRENCY
BILLING_DISCOUNT_LINE = "  -「{asset}」: -{saved} " + CURRENCY
BILLING_FINAL_COST = "结算价: {cost} " + CURRENCY
BILLING_BALANCE = "当前余额: {balance} " + CURRENCY
BILLING_BALANCE_AFTER = "扣款后: {balance} " + CURRENCY
BILLING_SEGMENTS = "计费区间:"
BILLING_NO_SEGMENTS = "  (无)"
SEGMENT_RULE = "- {rule}"
SEGMENT_RANGE = "  时段: {range}"
SEGMENT_COST = "  费用: {cost} " + CURRENCY
SEGMENT_CAPPED = " (已封顶)"
PASS_EXPIRY = "您的月卡将于 {time} 到期。"

# --- wallet ----------------------------------------------------------------
WALLET_HEADER_SELF = "--- 钱包余额 ---"
WALLET_HEADER_OTHER = "--- 用户 {user_id} 的钱包余额 ---"
WALLET_AVAILABLE = "可用: {available} " + CURRENCY + " (共 {all})"
WALLET_PAID = "  - 付费: {amount}"
WALLET_FREE = "  - 免费: {amount}"
WALLET_LOCKED = "您还有 {amount} " + CURRENCY + "未到可用时间。"
WALLET_EXPIRING = "注意：您有 {count} 免费" + CURRENCY + "将于 {time} 过期。"
WALLET_PASSES = "--- 可用月卡 ({count}) ---"
WALLET_TICKETS = "--- 可用优惠券 ({count}) ---"
ASSET_NAME = "- {name}"
ASSET_NAME_COUNT = "- {name} (x{count})"
ASSET_EXPIRY = "  到期: {time}"
UNKNOWN_ASSET = "未知物品"

# --- items -----------------------------------------------------------------
ITEMS_HEADER_SELF = "--- 您拥有的物品 ---"
ITEMS_HEADER_OTHER = "--- 用户 {user_id} 拥有的物品 ---"
ITEMS_EMPTY_SELF = "您当前没有任何物品。"
ITEMS_EMPTY_OTHER = "用户 {user_id} 没有任何物品。"

# --- occupants -------------------------------------------------------------
LIST_EMPTY = "窝里目前没有玩家呢"
LIST_HEADER = "窝里目前共有 {count} 人"
LIST_ENTRY = "玩家: {name}\n入场时间: {time}"
ANONYMOUS = "匿名玩家"

# --- machines --------------------------------------------------------------
MACHINE_ON = "{machine} 启动成功"
MACHINE_OFF = "{machine} 关闭成功"
MACHINE_STATE = "{machine}: {state}"
POWER_ON = "开启"
POWER_OFF = "关闭"
NO_MACHINES = "没有可控制的设备"

# --- wallet adjustments ----------------------------------------------------
WALLET_ADD_DONE = "为用户 {user_id} 增加" + CURRENCY + "成功"
WALLET_ADD_BEFORE = "增加前: {balance}"
WALLET_ADD_AFTER = "增加后: {balance}"
WALLET_DEDUCT_DONE = "为用户 {user_id} 扣除" + CURRENCY + "成功"
WALLET_DEDUCT_BEFORE = "扣款前: {balance}"
WALLET_DEDUCT_AFTER = "扣款后: {balance}"
WALLET_ADD_COMMENT = "管理员添加"
WALLET_DEDUCT_COMMENT = "管理员扣除"
OVERWRITE_DONE = "为用户 {user_id} 调价成功"

# --- redeem ----------------------------------------------------------------
REDEEM_EMPTY = "兑换成功，但没有获得任何物品。"
REDEEM_HEADER = "✅ 兑换成功！您获得了以下物品："
REDEEM_ITEM = "- {name} x{count}"
REDEEM_PASS_DAYS = "{name} ({days}天)"
