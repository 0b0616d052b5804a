from firststage.decoders import AssetRecord, UserDepositRecord, decode_asset_record, decode_user_deposit_record
from firststage.exceptions import FirstStageError, InvalidAddress, InvalidPhase, RecordNotFound, TaxRateInvalid, TruncatedRecord
from firststage.middleware import FirstStageMiddleware, SwapPhase
from firststage.swap import FixedInputQuote, FixedOutputQuote, QuoteParams, SwapContext
