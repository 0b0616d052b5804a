from firststage.constants import BPS_DENOMINATOR, RESERVED_TXNS_PER_TAXED_ASSET
from firststage.exceptions import TaxRateInvalid
from firststage.swap import FixedInputQuote, FixedOutputQuote


def check_total_tax_bps(total_tax_bps: int, inclusive=False):
    if total_tax_bps < 0 or total_tax_bps > BPS_DENOMINATOR or (not inclusive and total_tax_bps == BPS_DENOMINATOR):
        raise TaxRateInvalid(total_tax_bps)


def apply_sell_tax(amount: int, total_tax_bps: int) -> int:
    """
    Amount left for the swap once the sell tax is taken from `amount`.
    """
    check_total_tax_bps(total_tax_bps, inclusive=True)
    return (amount * (BPS_DENOMINATOR - total_tax_bps)) // BPS_DENOMINATOR


def apply_buy_tax(amount: int, total_tax_bps: int) -> int:
    """
    Gross amount required so that `amount` remains after the buy tax.
    """
    check_total_tax_bps(total_tax_bps)
    return (amount * BPS_DENOMINATOR) // (BPS_DENOMINATOR - total_tax_bps)


def get_tax_base(quote, total_tax_bps: int) -> int:
    if isinstance(quote, FixedInputQuote):
        return quote.amount
    if isinstance(quote, FixedOutputQuote):
        # The quoted amount is net of tax, invert it through the same rate.
        return apply_buy_tax(quote.quote, total_tax_bps)
    raise TypeError(f"Unsupported quote: {quote!r}")


def get_tax_amount(tax_base: int, total_tax_bps: int) -> int:
    return (tax_base * total_tax_bps) // BPS_DENOMINATOR


def get_reserved_txn_count(taxed_asset_count: int) -> int:
    return taxed_asset_count * RESERVED_TXNS_PER_TAXED_ASSET


def get_max_group_size(max_group_size: int, reserved_txn_count: int) -> int:
    return max(1, max_group_size - reserved_txn_count)
