import logging

from algosdk.encoding import decode_address, is_valid_address
from algosdk.error import AlgodHTTPError
from tinyman.utils import int_to_bytes

from firststage.constants import ASSET_BOX_PREFIX, GENERAL_EXEMPT_PREFIX, REFERRAL_EXEMPT_PREFIX
from firststage.exceptions import InvalidAddress


logger = logging.getLogger(__name__)

EXEMPT_PREFIXES = (GENERAL_EXEMPT_PREFIX, REFERRAL_EXEMPT_PREFIX)


def get_public_key(address: str) -> bytes:
    if not is_valid_address(address):
        raise InvalidAddress(address)
    return decode_address(address)


def get_asset_box_name(asset_id: int) -> bytes:
    """
    Asset configuration box: b"a" + asset id (uint64, big-endian).
    """
    return ASSET_BOX_PREFIX + int_to_bytes(asset_id)


def get_user_asset_box_name(asset_id: int, address: str) -> bytes:
    """
    Per-user deposit/freeze box: asset id (uint64, big-endian) + 32 byte public key.
    """
    return int_to_bytes(asset_id) + get_public_key(address)


def get_auth_address(address: str, algod) -> str:
    try:
        account_info = algod.account_info(address)
    except AlgodHTTPError as e:
        logger.warning("Could not resolve authorized signer of %s, using the address itself: %s", address, e)
        return address
    return account_info.get("auth-addr") or address


def get_exempt_wallet_box_name(prefix: bytes, address: str, algod=None) -> bytes:
    """
    Exempt wallet box: one prefix byte (b"g" general, b"r" referral/auth) + 32 byte public key.

    For the referral role the authorized signer of the account is used when an algod client is given.
    """
    if prefix not in EXEMPT_PREFIXES:
        raise ValueError(f"Unknown exempt wallet prefix: {prefix!r}")

    public_key = get_public_key(address)
    if prefix == REFERRAL_EXEMPT_PREFIX and algod is not None:
        public_key = get_public_key(get_auth_address(address, algod))

    return prefix + public_key
