import re
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError
from solders.pubkey import Pubkey

from blinkmint.core.errors import InvalidAccount, InvalidQueryParameter
from blinkmint.core.products import AssetStrategy, ProductConfig

from .schemas import ActionPostRequest

DEFAULT_SOL_ADDRESS = Pubkey.from_string("GqkJ3UoKTScvXiaJUxrGJ9QD847LAj2DTvMzqjaT2tJm")

# X handles: letters, digits and underscores, at most 15 characters
HANDLE_RE = re.compile(r"^[A-Za-z0-9_]{1,15}$")


@dataclass(frozen=True)
class ActionQuery:
    to_pubkey: Pubkey
    subject: str  # prompt or handle as the caller typed it
    asset_source: str  # prompt text, or profile photo URL for handles


def parse_pubkey(value: str) -> Pubkey:
    """Decode a base58 public key; raises ValueError unless it is 32 bytes"""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("public key must be a non-empty string")
    try:
        return Pubkey.from_string(value.strip())
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"invalid public key: {value!r}") from exc


def validated_query_params(params: Mapping[str, str], product: ProductConfig) -> ActionQuery:
    to_pubkey = DEFAULT_SOL_ADDRESS
    if params.get("to"):
        try:
            to_pubkey = parse_pubkey(params["to"])
        except ValueError as exc:
            raise InvalidQueryParameter("to", str(exc)) from exc

    subject = (params.get(product.parameter_name) or "").strip() or product.default_subject

    if product.asset_strategy == AssetStrategy.HANDLE:
        handle = subject.lstrip("@")
        if not HANDLE_RE.fullmatch(handle):
            raise InvalidQueryParameter(product.parameter_name, f"malformed handle {handle!r}")
        asset_source = product.profile_photo_url.format(handle=handle)
    else:
        asset_source = subject

    return ActionQuery(to_pubkey=to_pubkey, subject=subject, asset_source=asset_source)


def validated_account(body: Any) -> Pubkey:
    try:
        request = ActionPostRequest.model_validate(body)
        return parse_pubkey(request.account)
    except (ValidationError, ValueError) as exc:
        raise InvalidAccount(str(exc)) from exc
