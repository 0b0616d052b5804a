from base64 import b64encode

from algosdk import abi, transaction
from algosdk.error import AlgodHTTPError


ABI_RETURN_PREFIX = bytes.fromhex("151f7c75")


def get_suggested_params():
    return transaction.SuggestedParams(
        fee=0,
        first=1000,
        last=2000,
        gh=b64encode(bytes(32)).decode(),
        gen="firststage-test-v1",
        flat_fee=False,
        min_fee=1000,
    )


class LedgerAlgod():
    """
    In-memory stand-in for the algod endpoints the middleware reads.
    """

    def __init__(self):
        self.boxes = {}
        self.balances = {}
        self.auth_addresses = {}
        self.assets = {}
        self.errors = {}
        self.simulate_requests = []
        self.simulate_return_value = None
        self.simulate_failure_message = None

    def set_box(self, app_id, key, value):
        self.boxes.setdefault(app_id, {})[bytes(key)] = bytes(value)

    def set_account_balance(self, address, balance, asset_id):
        self.balances.setdefault(address, {})[asset_id] = balance

    def set_auth_address(self, address, auth_address):
        self.auth_addresses[address] = auth_address

    def create_asset(self, asset_id, params=None):
        self.assets[asset_id] = dict(params or {})

    def set_error(self, endpoint, code):
        self.errors[endpoint] = code

    def _raise_if_failing(self, endpoint):
        if endpoint in self.errors:
            raise AlgodHTTPError(f"{endpoint} failed", code=self.errors[endpoint])

    def suggested_params(self):
        return get_suggested_params()

    def application_box_by_name(self, application_id, box_name):
        self._raise_if_failing("application_box_by_name")
        try:
            value = self.boxes[application_id][bytes(box_name)]
        except KeyError:
            raise AlgodHTTPError("box not found", code=404)
        return {"name": b64encode(box_name).decode(), "round": 1000, "value": b64encode(value).decode()}

    def account_info(self, address, **kwargs):
        self._raise_if_failing("account_info")
        account_info = {"address": address, "amount": 0, "round": 1000}
        if address in self.auth_addresses:
            account_info["auth-addr"] = self.auth_addresses[address]
        return account_info

    def account_asset_info(self, address, asset_id, **kwargs):
        self._raise_if_failing("account_asset_info")
        try:
            amount = self.balances[address][asset_id]
        except KeyError:
            raise AlgodHTTPError("account asset info not found", code=404)
        return {
            "asset-holding": {"amount": amount, "asset-id": asset_id, "is-frozen": False},
            "round": 1000,
        }

    def asset_info(self, asset_id, **kwargs):
        self._raise_if_failing("asset_info")
        try:
            params = self.assets[asset_id]
        except KeyError:
            raise AlgodHTTPError("asset does not exist", code=404)
        return {"index": asset_id, "params": params}

    def set_simulate_result(self, return_value, failure_message=None):
        self.simulate_return_value = return_value
        self.simulate_failure_message = failure_message

    def simulate_transactions(self, request, **kwargs):
        self._raise_if_failing("simulate_transactions")
        self.simulate_requests.append(request)

        txn_results = []
        for _ in request.txn_groups[0].txns:
            logs = []
            if self.simulate_return_value is not None:
                return_log = ABI_RETURN_PREFIX + abi.BoolType().encode(self.simulate_return_value)
                logs.append(b64encode(return_log).decode())
            txn_results.append({"txn-result": {"txn": {"txn": {}}, "pool-error": "", "logs": logs}})

        txn_group = {"txn-results": txn_results}
        if self.simulate_failure_message:
            txn_group["failure-message"] = self.simulate_failure_message
            txn_group["failed-at"] = [0]
        return {"version": 2, "last-round": 1000, "txn-groups": [txn_group]}
