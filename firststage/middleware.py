from dataclasses import replace
from enum import Enum
import logging
from typing import List

from algosdk.atomic_transaction_composer import TransactionWithSigner
from algosdk.constants import ZERO_ADDRESS

from firststage.boxes import get_public_key
from firststage.cache import ClientCache
from firststage.client import FirstStageClient, get_default_algod
from firststage.constants import BONFIRE_WALLET, DEFAULT_MAX_GROUP_SIZE, DEPLOYER_WALLET, FIRST_STAGE_MAINNET_APP_ID
from firststage.exceptions import InvalidPhase
from firststage.swap import QuoteParams, SwapContext
from firststage.tax import apply_buy_tax, apply_sell_tax, get_max_group_size, get_reserved_txn_count, get_tax_amount, get_tax_base


logger = logging.getLogger(__name__)


class SwapPhase(Enum):
    NOT_APPLICABLE = "not_applicable"
    PREPARING_PRE = "preparing_pre"
    PREPARED_PRE = "prepared_pre"
    PREPARING_POST = "preparing_post"
    DONE = "done"


PHASE_TRANSITIONS = {
    SwapPhase.NOT_APPLICABLE: SwapPhase.PREPARING_PRE,
    SwapPhase.PREPARING_PRE: SwapPhase.PREPARED_PRE,
    SwapPhase.PREPARED_PRE: SwapPhase.PREPARING_POST,
    SwapPhase.PREPARING_POST: SwapPhase.DONE,
}


class SwapSession():
    """
    Per-hook state of one swap. Nothing is retained once the hook returns.

    Asset records are cached for the duration of a single phase only.
    """

    def __init__(self, address, from_asset_id, to_asset_id, phase=SwapPhase.NOT_APPLICABLE) -> None:
        self.address = address
        self.from_asset_id = from_asset_id
        self.to_asset_id = to_asset_id
        self.phase = phase
        self.asset_infos = {}

    @property
    def key(self):
        return (self.address, self.from_asset_id, self.to_asset_id)

    def advance(self, phase: SwapPhase):
        if PHASE_TRANSITIONS.get(self.phase) != phase:
            raise InvalidPhase(f"Can not move swap session from {self.phase.value} to {phase.value}")

        logger.debug("Swap session %s: %s -> %s", self.key, self.phase.value, phase.value)
        self.phase = phase
        self.asset_infos = {}

    def get_asset_info(self, client: FirstStageClient, asset_id: int):
        if asset_id not in self.asset_infos:
            self.asset_infos[asset_id] = client.get_asset_info(asset_id)
        return self.asset_infos[asset_id]


class FirstStageMiddleware():
    name = "FirstStageDeflex"
    version = "1.0.0"

    def __init__(self, referral_address=None, app_id=FIRST_STAGE_MAINNET_APP_ID, client_cache=None, client_class=FirstStageClient) -> None:
        if referral_address is not None:
            get_public_key(referral_address)

        self.app_id = app_id
        self.referral_address = referral_address or ZERO_ADDRESS
        self.client_cache = client_cache if client_cache is not None else ClientCache()
        self.client_class = client_class

    def get_client(self, sender: str, algod=None) -> FirstStageClient:
        """
        Returns the cached client of the sender, reading the ledger through `algod` when given.
        """
        client = self.client_cache.get_or_create(sender, lambda: self.client_class(algod or get_default_algod(), self.app_id))
        if algod is None:
            return client
        return client.with_algod(algod)

    def get_asset_info(self, asset_id: int, algod=None):
        client = self.client_class(algod or get_default_algod(), self.app_id)
        return client.get_asset_info(asset_id)

    def should_apply(self, from_asset_id: int, to_asset_id: int) -> bool:
        return bool(from_asset_id) or bool(to_asset_id)

    def adjust_quote_params(self, params: QuoteParams) -> QuoteParams:
        if not params.address:
            raise ValueError("Address required for FirstStageMiddleware")

        client = self.get_client(params.address, params.algod)
        taxed_asset_count = 0
        adjusted_amount = params.amount or 0

        for asset_id in dict.fromkeys([params.from_asset_id, params.to_asset_id]):
            if not asset_id:
                continue

            asset_info = client.get_asset_info(asset_id)
            if asset_info is None:
                continue

            if asset_info.is_taxed:
                taxed_asset_count += 1

            if asset_info.sell_tax and asset_id == params.from_asset_id:
                adjusted_amount = apply_sell_tax(adjusted_amount, asset_info.total_tax_bps)

            if asset_info.buy_tax and asset_id == params.to_asset_id:
                adjusted_amount = apply_buy_tax(adjusted_amount, asset_info.total_tax_bps)

        max_group_size = get_max_group_size(
            params.max_group_size or DEFAULT_MAX_GROUP_SIZE,
            get_reserved_txn_count(taxed_asset_count),
        )
        logger.debug("Adjusted quote amount %s -> %s, max group size %s", params.amount, adjusted_amount, max_group_size)

        return replace(
            params,
            amount=adjusted_amount,
            max_group_size=max_group_size,
            opt_in=False,
            adjusted_amount=adjusted_amount,
        )

    def before_swap(self, context: SwapContext) -> List[TransactionWithSigner]:
        if not self.should_apply(context.from_asset_id, context.to_asset_id):
            return []

        session = SwapSession(context.address, context.from_asset_id, context.to_asset_id)
        session.advance(SwapPhase.PREPARING_PRE)

        address = context.address
        client = self.get_client(address, context.algod)
        transactions = []

        for asset_id in dict.fromkeys([context.from_asset_id, context.to_asset_id]):
            if not asset_id:
                continue

            if not client.is_opted_in(address, asset_id):
                logger.debug("%s is not opted in to %s, adding opt-in", address, asset_id)
                transactions.append(client.prepare_opt_in_transaction(address, asset_id, context.suggested_params, context.signer))

            asset_info = session.get_asset_info(client, asset_id)
            if asset_info is None:
                logger.debug("Asset %s is not protocol enabled", asset_id)
                continue

            boxes = client.get_box_references(address, asset_id)
            freeze_eligible = client.is_freeze_eligible(address, asset_id)
            user_box_exists = client.has_user_box(address, asset_id)

            # Always true for the assets iterated here.
            is_swap_asset = asset_id in (context.from_asset_id, context.to_asset_id)
            if freeze_eligible and not user_box_exists and is_swap_asset:
                logger.debug("Registering %s for freeze of %s", address, asset_id)
                transactions += client.prepare_freeze_transactions(address, asset_id, boxes, context.suggested_params, context.signer)

            user_balance = client.get_user_balance(address, asset_id)
            transactions += client.prepare_operations_top_transactions(
                address, asset_id, user_balance, boxes, context.suggested_params, context.signer
            )

        session.advance(SwapPhase.PREPARED_PRE)
        return transactions

    def after_swap(self, context: SwapContext) -> List[TransactionWithSigner]:
        if not self.should_apply(context.from_asset_id, context.to_asset_id):
            return []
        if context.quote is None:
            raise ValueError("Quote required for FirstStageMiddleware.after_swap")

        # Nothing is kept between the hooks, the post-swap phase reads every record again.
        session = SwapSession(context.address, context.from_asset_id, context.to_asset_id, phase=SwapPhase.PREPARED_PRE)
        session.advance(SwapPhase.PREPARING_POST)
        client = self.get_client(context.address, context.algod)

        # A same-asset swap is settled as both legs.
        transactions = []
        transactions += self._prepare_settlement(
            session, client, context, context.from_asset_id,
            is_from_asset=True,
            is_to_asset=context.from_asset_id == context.to_asset_id,
        )
        transactions += self._prepare_settlement(
            session, client, context, context.to_asset_id,
            is_from_asset=False,
            is_to_asset=True,
        )

        session.advance(SwapPhase.DONE)
        return transactions

    def _prepare_settlement(self, session, client, context, asset_id, is_from_asset, is_to_asset) -> List[TransactionWithSigner]:
        if not asset_id:
            return []

        asset_info = session.get_asset_info(client, asset_id)
        if asset_info is None:
            return []

        tax_amount = 0
        if (is_from_asset and asset_info.sell_tax) or (is_to_asset and asset_info.buy_tax):
            tax_base = get_tax_base(context.quote, asset_info.total_tax_bps)
            tax_amount = get_tax_amount(tax_base, asset_info.total_tax_bps)
        logger.debug("Tax for %s on asset %s: %s", context.address, asset_id, tax_amount)

        accounts = [
            asset_info.main_pool or ZERO_ADDRESS,
            BONFIRE_WALLET,
            DEPLOYER_WALLET,
            client.get_asset_reserve(asset_id),
        ]
        return client.prepare_operations_bottom_transactions(
            context.address,
            asset_id,
            tax_amount,
            accounts,
            self.referral_address,
            context.suggested_params,
            context.signer,
        )
