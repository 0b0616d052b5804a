from base64 import b64decode
from copy import copy
from dataclasses import dataclass
import logging
from typing import List, Optional

from algosdk import transaction
from algosdk.atomic_transaction_composer import AtomicTransactionComposer, EmptySigner, TransactionWithSigner
from algosdk.constants import ZERO_ADDRESS
from algosdk.error import AlgodHTTPError
from algosdk.logic import get_application_address
from algosdk.v2client import algod as algod_client
from algosdk.v2client.models import SimulateRequest

from firststage.boxes import get_asset_box_name, get_exempt_wallet_box_name, get_user_asset_box_name
from firststage.constants import *
from firststage.decoders import AssetRecord, UserDepositRecord
from firststage.exceptions import FirstStageError, RecordNotFound
from firststage.methods import (
    check_is_address_exempt_method,
    check_is_address_maybe_exempt_app_method,
    freeze_method,
    general_operations_bottom_method,
    general_operations_top_method,
)


logger = logging.getLogger(__name__)


def get_default_algod():
    return algod_client.AlgodClient("", ALGOD_MAINNET_ADDRESS)


def is_not_found(error: AlgodHTTPError) -> bool:
    return error.code == 404


@dataclass(frozen=True)
class BoxReference:
    app_id: int
    name: bytes
    write: bool = False


class FirstStageClient():
    def __init__(self, algod, app_id=FIRST_STAGE_MAINNET_APP_ID) -> None:
        self.algod = algod
        self.app_id = app_id
        self.application_address = get_application_address(self.app_id)

    def with_algod(self, algod):
        """
        Same client reading the ledger through another algod client.
        """
        if algod is self.algod:
            return self
        client = copy(self)
        client.algod = algod
        return client

    def get_box(self, box_name: bytes, app_id=None) -> bytes:
        app_id = app_id or self.app_id

        try:
            response = self.algod.application_box_by_name(app_id, box_name)
        except AlgodHTTPError as e:
            if is_not_found(e):
                raise RecordNotFound(app_id, box_name) from e
            raise

        return b64decode(response["value"])

    def box_exists(self, box_name: bytes, app_id=None) -> bool:
        try:
            self.get_box(box_name, app_id=app_id)
        except RecordNotFound:
            return False
        return True

    def get_asset_info(self, asset_id: int) -> Optional[AssetRecord]:
        """
        Returns None if the asset has no box, i.e. it is not protocol enabled.
        A box that exists but can not be decoded raises TruncatedRecord.
        """
        try:
            box_value = self.get_box(get_asset_box_name(asset_id))
        except RecordNotFound:
            return None
        return AssetRecord.from_bytes(box_value)

    def get_user_deposit_info(self, address: str, asset_id: int) -> Optional[UserDepositRecord]:
        try:
            box_value = self.get_box(get_user_asset_box_name(asset_id, address))
        except RecordNotFound:
            return None
        return UserDepositRecord.from_bytes(box_value)

    def has_user_box(self, address: str, asset_id: int) -> bool:
        return self.box_exists(get_user_asset_box_name(asset_id, address))

    def get_asset_holding(self, address: str, asset_id: int) -> Optional[dict]:
        try:
            account_asset_info = self.algod.account_asset_info(address, asset_id)
        except AlgodHTTPError as e:
            if is_not_found(e):
                return None
            raise
        return account_asset_info.get("asset-holding")

    def is_opted_in(self, address: str, asset_id: int) -> bool:
        return self.get_asset_holding(address, asset_id) is not None

    def get_user_balance(self, address: str, asset_id: int) -> int:
        asset_holding = self.get_asset_holding(address, asset_id)
        if asset_holding is None:
            return 0
        return asset_holding.get("amount", 0)

    def get_asset_reserve(self, asset_id: int) -> str:
        asset_info = self.algod.asset_info(asset_id)
        return asset_info["params"].get("reserve") or ZERO_ADDRESS

    def get_box_references(self, address: str, asset_id: int) -> List[BoxReference]:
        return [
            BoxReference(self.app_id, get_asset_box_name(asset_id)),
            BoxReference(self.app_id, get_user_asset_box_name(asset_id, address), write=True),
            BoxReference(self.app_id, get_exempt_wallet_box_name(GENERAL_EXEMPT_PREFIX, address)),
            BoxReference(self.app_id, get_exempt_wallet_box_name(REFERRAL_EXEMPT_PREFIX, address, algod=self.algod)),
        ]

    def _simulate_readonly_call(self, method, sender, method_args):
        atc = AtomicTransactionComposer()
        atc.add_method_call(
            app_id=self.app_id,
            method=method,
            sender=sender,
            sp=self.algod.suggested_params(),
            signer=EmptySigner(),
            method_args=method_args,
        )
        request = SimulateRequest(txn_groups=[], allow_empty_signatures=True, allow_unnamed_resources=True)
        response = atc.simulate(self.algod, request)
        if response.failure_message:
            raise FirstStageError(f"{method.name} simulation failed: {response.failure_message}")
        return response.abi_results[0].return_value

    def is_address_exempt(self, address: str, asset_id: int) -> bool:
        return self._simulate_readonly_call(check_is_address_exempt_method, address, [address, asset_id]) is True

    def is_address_maybe_exempt_app(self, address: str, asset_id: int) -> bool:
        return self._simulate_readonly_call(check_is_address_maybe_exempt_app_method, address, [address, asset_id]) is True

    def is_freeze_eligible(self, address: str, asset_id: int) -> bool:
        if self.is_address_exempt(address, asset_id):
            return False
        if self.is_address_maybe_exempt_app(address, asset_id):
            return False
        return True

    def get_suggested_params_with_extra_fee(self, sp, extra_fee: int):
        sp = copy(sp)
        sp.flat_fee = True
        sp.fee = (sp.min_fee or MIN_TXN_FEE) + extra_fee
        return sp

    def _translate_boxes(self, boxes):
        return [(0 if box.app_id == self.app_id else box.app_id, box.name) for box in boxes]

    def _prepare_method_call(self, method, sender, sp, signer, method_args, **kwargs) -> List[TransactionWithSigner]:
        """
        Returns the method call preceded by its transaction arguments, without a group id.
        """
        atc = AtomicTransactionComposer()
        atc.add_method_call(
            app_id=self.app_id,
            method=method,
            sender=sender,
            sp=sp,
            signer=signer,
            method_args=method_args,
            **kwargs
        )
        transactions = atc.build_group()
        # The host adds these to its own group.
        for txn_with_signer in transactions:
            txn_with_signer.txn.group = None
        return transactions

    def prepare_opt_in_transaction(self, sender: str, asset_id: int, sp, signer) -> TransactionWithSigner:
        return TransactionWithSigner(
            transaction.AssetTransferTxn(
                sender=sender,
                sp=sp,
                receiver=sender,
                amt=0,
                index=asset_id,
            ),
            signer,
        )

    def prepare_freeze_transactions(self, sender: str, asset_id: int, boxes, sp, signer) -> List[TransactionWithSigner]:
        mbr_payment = transaction.PaymentTxn(
            sender=sender,
            sp=sp,
            receiver=self.application_address,
            amt=USER_BOX_MIN_BALANCE,
        )
        return self._prepare_method_call(
            freeze_method,
            sender=sender,
            sp=self.get_suggested_params_with_extra_fee(sp, FREEZE_EXTRA_FEE),
            signer=signer,
            method_args=[asset_id, sender, TransactionWithSigner(mbr_payment, signer)],
            foreign_assets=[asset_id],
            boxes=self._translate_boxes(boxes),
        )

    def prepare_operations_top_transactions(self, sender: str, asset_id: int, user_balance: int, boxes, sp, signer) -> List[TransactionWithSigner]:
        return self._prepare_method_call(
            general_operations_top_method,
            sender=sender,
            sp=self.get_suggested_params_with_extra_fee(sp, OPERATIONS_TOP_EXTRA_FEE),
            signer=signer,
            method_args=[OPERATIONS_TOP_FLAG, asset_id, user_balance],
            foreign_assets=[asset_id],
            boxes=self._translate_boxes(boxes),
        )

    def prepare_operations_bottom_transactions(self, sender: str, asset_id: int, tax_amount: int, accounts, referral_address: str, sp, signer) -> List[TransactionWithSigner]:
        tax_transfer = transaction.AssetTransferTxn(
            sender=sender,
            sp=sp,
            receiver=self.application_address,
            amt=tax_amount,
            index=asset_id,
        )
        return self._prepare_method_call(
            general_operations_bottom_method,
            sender=sender,
            sp=self.get_suggested_params_with_extra_fee(sp, OPERATIONS_BOTTOM_EXTRA_FEE),
            signer=signer,
            method_args=[OPERATIONS_BOTTOM_FLAG, asset_id, TransactionWithSigner(tax_transfer, signer), referral_address],
            accounts=list(accounts),
            foreign_apps=[TM_APP_ID],
            foreign_assets=[asset_id],
        )
