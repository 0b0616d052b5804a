from algosdk import abi


freeze_method = abi.Method(
    name="freeze",
    args=[
        abi.Argument(arg_type="uint64", name="asset"),
        abi.Argument(arg_type="address", name="refreezeAddress"),
        abi.Argument(arg_type="pay", name="mbr"),
    ],
    returns=abi.Returns("void"),
)


general_operations_top_method = abi.Method(
    name="generalOperationsTop",
    args=[
        abi.Argument(arg_type="uint64", name="flagtop"),
        abi.Argument(arg_type="uint64", name="asset"),
        abi.Argument(arg_type="uint64", name="userBalance"),
    ],
    returns=abi.Returns("void"),
)


general_operations_bottom_method = abi.Method(
    name="generalOperationsBottom",
    args=[
        abi.Argument(arg_type="uint64", name="flagbottom"),
        abi.Argument(arg_type="uint64", name="asset"),
        abi.Argument(arg_type="axfer", name="taxTransfer"),
        abi.Argument(arg_type="address", name="referral"),
    ],
    returns=abi.Returns("void"),
)


check_is_address_exempt_method = abi.Method(
    name="checkIsAddressExempt",
    args=[
        abi.Argument(arg_type="address", name="address"),
        abi.Argument(arg_type="uint64", name="asset"),
    ],
    returns=abi.Returns("bool"),
)


check_is_address_maybe_exempt_app_method = abi.Method(
    name="checkIsAddressMaybeExemptApp",
    args=[
        abi.Argument(arg_type="address", name="address"),
        abi.Argument(arg_type="uint64", name="asset"),
    ],
    returns=abi.Returns("bool"),
)

