"""
MVM SDK for Python
Encode contract calls into MVM memo extras and resolve registry contracts.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import DEFAULT, MvmConfig  # noqa: F401
from .errors import (  # noqa: F401
    AbiError,
    ApiError,
    ArityError,
    FormatError,
    MissingAddressError,
    MissingSelectorError,
    MvmSdkError,
    PayloadTooLargeError,
    RegistryUnavailableError,
    RpcError,
    UploadError,
)

# Codec
from .codec.encoder import Decoder, Encoder  # noqa: F401
from .codec.memo import Memo, decode_memo, encode_memo  # noqa: F401

# Contracts & extras
from .contracts.call import ContractCall, encode_call  # noqa: F401
from .contracts.client import ContractClient  # noqa: F401
from .extra.generator import (  # noqa: F401
    ExtraGenerator,
    ExtraKind,
    ExtraOptions,
    ExtraResult,
    generate_extra,
)

# Network clients
from .api.client import MvmApiClient  # noqa: F401
from .rpc.http import RpcClient  # noqa: F401
from .registry.resolver import RegistryResolver  # noqa: F401

# Tx helpers
from .tx.build import TransactionInput, build_transaction_input  # noqa: F401
from .tx.payment import PaymentRequest, generate_payment  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "MvmConfig", "DEFAULT",
    "MvmSdkError", "FormatError", "ArityError", "MissingAddressError",
    "MissingSelectorError", "PayloadTooLargeError", "UploadError",
    "RegistryUnavailableError", "AbiError", "RpcError", "ApiError",
    # Codec
    "Encoder", "Decoder", "Memo", "encode_memo", "decode_memo",
    # Contracts & extras
    "ContractCall", "encode_call", "ContractClient",
    "ExtraGenerator", "ExtraKind", "ExtraOptions", "ExtraResult", "generate_extra",
    # Network
    "MvmApiClient", "RpcClient", "RegistryResolver",
    # Tx
    "TransactionInput", "build_transaction_input", "PaymentRequest", "generate_payment",
]
