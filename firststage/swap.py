from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class FixedInputQuote:
    """The amount sent is fixed."""
    amount: int


@dataclass(frozen=True)
class FixedOutputQuote:
    """The amount received is fixed, `quote` is the amount quoted for the other side."""
    amount: int
    quote: int


Quote = Union[FixedInputQuote, FixedOutputQuote]


@dataclass
class QuoteParams:
    from_asset_id: int
    to_asset_id: int
    amount: int
    address: Optional[str] = None
    max_group_size: Optional[int] = None
    opt_in: Optional[bool] = None
    adjusted_amount: Optional[int] = None
    algod: Any = field(default=None, repr=False, compare=False)


@dataclass
class SwapContext:
    address: str
    from_asset_id: int
    to_asset_id: int
    algod: Any = field(repr=False, compare=False)
    signer: Any = field(repr=False, compare=False)
    suggested_params: Any = field(repr=False, compare=False)
    quote: Optional[Quote] = None
