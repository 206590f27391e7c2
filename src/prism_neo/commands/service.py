"""
prism_neo.commands.service

Command handlers.

Responsibilities:
- Decide which member a command acts on (self, or another member for admins).
- Call the remote API and hand the responses to the billing/wallet renderers.
- Drive the two-step logout: preview first, close the session on confirmation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo

from prism_neo import messages
from prism_neo.auth.capability import has_capability, strip_bind_prefix
from prism_neo.auth.models import Caller
from prism_neo.billing.confirmation import ConfirmationStore
from prism_neo.billing.formatting import format_datetime
from prism_neo.billing.report import render_preview, render_receipt
from prism_neo.billing.wallet import render_items, render_wallet
from prism_neo.commands.errors import InsufficientPrivilege, InvalidArgument, MissingArgument
from prism_neo.observability.logging import get_logger
from prism_neo.settings import Settings
from prism_neo.space_api.client import SpaceApiClient
from prism_neo.space_api.models import MachinePower, RedeemedItem

log = get_logger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000
PASS_ASSET_TYPE = "PASS"


@dataclass(frozen=True, slots=True)
class Target:
    user_id: str
    # True when an admin named another member explicitly.
    on_behalf: bool = False

    @property
    def display(self) -> str | None:
        return self.user_id if self.on_behalf else None


def parse_amount(raw: str | None) -> int:
    if raw is None or not str(raw).strip():
        raise MissingArgument(messages.MISSING_AMOUNT)
    try:
        return int(str(raw).strip())
    except ValueError as e:
        raise InvalidArgument(messages.INVALID_AMOUNT) from e


def redeemed_item_name(item: RedeemedItem) -> str:
    if item.asset_type == PASS_ASSET_TYPE and item.duration_ms:
        days = item.duration_ms // MS_PER_DAY
        if days > 0:
            return messages.REDEEM_PASS_DAYS.format(name=item.name, days=days)
    return item.name


def _power_label(machine: MachinePower) -> str:
    return messages.POWER_ON if machine.state.state else messages.POWER_OFF


class CommandService:
    def __init__(
        self,
        *,
        api: SpaceApiClient,
        confirmations: ConfirmationStore,
        admin_capability: str = "authority:3",
        bind_type: str = "QQ",
        tz: tzinfo | None = None,
    ) -> None:
        self._api = api
        self._confirmations = confirmations
        self._admin_capability = admin_capability
        self._bind_type = bind_type
        self._tz = tz

    @classmethod
    def from_settings(
        cls, settings: Settings, *, api: SpaceApiClient, confirmations: ConfirmationStore
    ) -> CommandService:
        return cls(
            api=api,
            confirmations=confirmations,
            admin_capability=settings.admin_capability,
            bind_type=settings.bind_type,
            tz=ZoneInfo(settings.display_timezone),
        )

    def resolve_target(self, caller: Caller, user: str | None) -> Target:
        # The capability is checked against the caller, never against the named member.
        if user:
            if not has_capability(caller, self._admin_capability):
                log.info("privilege_denied", caller=caller.user_id, target=user)
                raise InsufficientPrivilege()
            return Target(user_id=strip_bind_prefix(user), on_behalf=True)
        return Target(user_id=caller.user_id)

    # --- membership / sessions ------------------------------------------------

    async def register(self, caller: Caller, user: str | None = None) -> str:
        target = self.resolve_target(caller, user)
        await self._api.register(target.user_id)
        log.info("registered", target=target.user_id)
        if target.on_behalf:
            return messages.REGISTERED_OTHER.format(user_id=target.user_id)
        return messages.REGISTERED_SELF

    async def login(self, caller: Caller, user: str | None = None) -> str:
        target = self.resolve_target(caller, user)
        await self._api.login(target.user_id)
        door = await self._api.door_password(target.user_id)
        log.info("logged_in", target=target.user_id)
        if target.on_behalf:
            head = messages.LOGIN_OTHER.format(user_id=target.user_id, password=door.password)
        else:
            head = messages.LOGIN_SELF.format(password=door.password)
        return f"{head}\n{messages.DOOR_CODE_VALIDITY}"

    async def logout(self, caller: Caller, user: str | None = None) -> str:
        target = self.resolve_target(caller, user)

        # Check-and-set happens before the first await.
        decision = self._confirmations.begin_or_confirm(target.user_id)
        if decision.confirmed:
            result = await self._api.logout(target.user_id)
            log.info("logout_confirmed", target=target.user_id, final_cost=result.session.final_cost)
            return render_receipt(result, target_user=target.display, tz=self._tz)

        try:
            preview = await self._api.billing(target.user_id)
            report = render_preview(preview, tz=self._tz)
        except Exception:
            # No preview was shown, so the next logout must not count as a confirmation.
            self._confirmations.cancel(target.user_id, decision.requested_at_ms)
            raise
        log.info("logout_preview", target=target.user_id)
        seconds = self._confirmations.ttl_seconds
        if target.on_behalf:
            prompt = messages.CONFIRM_PROMPT_OTHER.format(seconds=seconds, user=user)
            header = messages.PREVIEW_FOR_OTHER.format(user_id=target.user_id)
            return f"{header}\n\n{report}\n\n{messages.SECTION_BREAK}\n{prompt}"
        prompt = messages.CONFIRM_PROMPT_SELF.format(seconds=seconds)
        return f"{report}\n\n{messages.SECTION_BREAK}\n{prompt}"

    async def list_active(self, caller: Caller) -> str:
        users = await self._api.list_active()
        if not users:
            return messages.LIST_EMPTY

        blocks = []
        for occupant in users:
            name = occupant.bind_id(self._bind_type) or messages.ANONYMOUS
            entered = occupant.sessions[0].created_at if occupant.sessions else None
            blocks.append(messages.LIST_ENTRY.format(name=name, time=format_datetime(entered, self._tz)))
        return messages.LIST_HEADER.format(count=len(users)) + "\n\n" + "\n\n".join(blocks)

    async def billing(self, caller: Caller, user: str | None = None) -> str:
        target = self.resolve_target(caller, user)
        preview = await self._api.billing(target.user_id)
        report = render_preview(preview, tz=self._tz)
        if target.on_behalf:
            return messages.BILLING_FOR_OTHER.format(user_id=target.user_id) + "\n\n" + report
        return report

    async def lock(self, caller: Caller) -> str:
        door = await self._api.door_password(caller.user_id)
        return "\n".join(
            [
                messages.LOCK_HEADER,
                messages.LOCK_PASSWORD.format(password=door.password),
                messages.DOOR_CODE_VALIDITY,
            ]
        )

    # --- wallet / assets -------------------------------------------------------

    async def wallet(self, caller: Caller, user: str | None = None) -> str:
        target = self.resolve_target(caller, user)
        wallet = await self._api.wallet(target.user_id)
        return render_wallet(wallet, target_user=target.display, tz=self._tz)

    async def items(self, caller: Caller, user: str | None = None) -> str:
        target = self.resolve_target(caller, user)
        holdings = await self._api.assets(target.user_id)
        return render_items(holdings, target_user=target.display, tz=self._tz)

    async def redeem(self, caller: Caller, code: str | None = None) -> str:
        target = self.resolve_target(caller, None)
        if not code:
            raise MissingArgument(messages.MISSING_CODE)

        items = await self._api.redeem(target.user_id, code=code)
        log.info("redeemed", target=target.user_id, items=len(items))
        if not items:
            return messages.REDEEM_EMPTY
        lines = [messages.REDEEM_HEADER]
        for item in items:
            lines.append(messages.REDEEM_ITEM.format(name=redeemed_item_name(item), count=item.count))
        return "\n".join(lines)

    async def wallet_add(self, caller: Caller, user: str | None = None, amount: str | None = None) -> str:
        target = self._resolve_admin_target(caller, user)
        value = parse_amount(amount)
        res = await self._api.adjust_wallet(
            target.user_id, amount=value, comment=messages.WALLET_ADD_COMMENT
        )
        log.info("wallet_adjusted", target=target.user_id, amount=value)
        return "\n".join(
            [
                messages.WALLET_ADD_DONE.format(user_id=target.user_id),
                messages.WALLET_ADD_BEFORE.format(balance=res.original_balance),
                messages.WALLET_ADD_AFTER.format(balance=res.final_balance),
            ]
        )

    async def wallet_deduct(
        self, caller: Caller, user: str | None = None, amount: str | None = None
    ) -> str:
        target = self._resolve_admin_target(caller, user)
        value = parse_amount(amount)
        res = await self._api.adjust_wallet(
            target.user_id, amount=-value, comment=messages.WALLET_DEDUCT_COMMENT
        )
        log.info("wallet_adjusted", target=target.user_id, amount=-value)
        return "\n".join(
            [
                messages.WALLET_DEDUCT_DONE.format(user_id=target.user_id),
                messages.WALLET_DEDUCT_BEFORE.format(balance=res.original_balance),
                messages.WALLET_DEDUCT_AFTER.format(balance=res.final_balance),
            ]
        )

    async def overwrite(self, caller: Caller, user: str | None = None, amount: str | None = None) -> str:
        target = self._resolve_admin_target(caller, user)
        value = parse_amount(amount)
        await self._api.overwrite_cost(target.user_id, cost=value)
        log.info("cost_overwritten", target=target.user_id, cost=value)
        return messages.OVERWRITE_DONE.format(user_id=target.user_id)

    def _resolve_admin_target(self, caller: Caller, user: str | None) -> Target:
        # Admin-only commands name their target explicitly; without one they still need
        # the capability rather than silently acting on the caller.
        if not user:
            if not has_capability(caller, self._admin_capability):
                raise InsufficientPrivilege()
            raise MissingArgument(messages.MISSING_USER)
        return self.resolve_target(caller, user)

    # --- machines --------------------------------------------------------------

    async def show(self, caller: Caller, alias: str | None = None) -> str:
        if alias:
            machine = await self._api.machine_power(alias)
            return messages.MACHINE_STATE.format(machine=machine.machine, state=_power_label(machine))
        machines = await self._api.all_machine_power()
        if not machines:
            return messages.NO_MACHINES
        return "\n".join(
            messages.MACHINE_STATE.format(machine=m.machine, state=_power_label(m)) for m in machines
        )

    async def power_on(self, caller: Caller, alias: str | None = None) -> str:
        if not alias:
            raise MissingArgument(messages.MISSING_ALIAS)
        res = await self._api.set_machine_power(alias, on=True, user_id=caller.user_id)
        log.info("machine_power", machine=res.machine, on=True)
        return messages.MACHINE_ON.format(machine=res.machine)

    async def power_off(self, caller: Caller, alias: str | None = None) -> str:
        if not alias:
            raise MissingArgument(messages.MISSING_ALIAS)
        res = await self._api.set_machine_power(alias, on=False, user_id=caller.user_id)
        log.info("machine_power", machine=res.machine, on=False)
        return messages.MACHINE_OFF.format(machine=res.machine)


# --- Module Notes -----------------------------------------------------------
# Handlers raise `CommandError` subclasses for anything the member caused; the router turns
# those, remote failures and unexpected errors into the single reply string.
