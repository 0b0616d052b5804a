class FirstStageError(Exception):
    pass


class InvalidAddress(FirstStageError, ValueError):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Invalid account address: {address!r}")


class TruncatedRecord(FirstStageError):
    def __init__(self, record_name, expected_length, actual_length):
        self.record_name = record_name
        self.expected_length = expected_length
        self.actual_length = actual_length
        super().__init__(
            f"{record_name} box too short, expected at least {expected_length} bytes, got {actual_length}"
        )


class TaxRateInvalid(FirstStageError, ValueError):
    def __init__(self, total_tax_bps):
        self.total_tax_bps = total_tax_bps
        super().__init__(f"Total tax rate must be below 10000 bps, got {total_tax_bps}")


class RecordNotFound(FirstStageError):
    def __init__(self, app_id, box_name):
        self.app_id = app_id
        self.box_name = box_name
        super().__init__(f"Box {box_name.hex()} does not exist in application {app_id}")


class InvalidPhase(FirstStageError):
    pass
