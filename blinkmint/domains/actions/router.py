import logging
from typing import Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from blinkmint.core.errors import ActionError, InputValidationError
from blinkmint.core.products import ProductConfig
from blinkmint.core.registry import get_cors_headers, get_mint_service, get_product
from blinkmint.shared.utils.response import action_error, action_response

from .schemas import ActionGetResponse, ActionLinks, ActionParameter, LinkedAction
from .service import MintActionService
from .validation import validated_account, validated_query_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/actions", tags=["actions"])


def _origin(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def build_discovery_payload(request: Request, product: ProductConfig) -> ActionGetResponse:
    query = validated_query_params(request.query_params, product)
    origin = _origin(request)
    name = product.parameter_name
    base_href = f"{origin}{request.url.path}?to={query.to_pubkey}"

    return ActionGetResponse(
        title=product.title,
        icon=f"{origin}{product.icon_path}",
        description=product.description,
        label=product.label,
        links=ActionLinks(
            actions=[
                LinkedAction(
                    label=product.action_label,  # button text
                    href=f"{base_href}&{name}={{{name}}}",  # text input placeholder
                    parameters=[
                        ActionParameter(name=name, label=product.parameter_label, required=True)
                    ],
                )
            ]
        ),
    )


# OPTIONS shares the GET handler so blink clients pass CORS preflight
@router.api_route("/mint", methods=["GET", "OPTIONS"])
async def get_mint_action(
    request: Request,
    product: ProductConfig = Depends(get_product),
    headers: Dict[str, str] = Depends(get_cors_headers),
) -> JSONResponse:
    try:
        return action_response(build_discovery_payload(request, product), headers=headers)
    except InputValidationError as e:
        logger.warning("Rejected discovery request: %s", e.detail)
        return action_error(e.public_message, headers=headers)
    except Exception:
        logger.exception("Discovery failed")
        return action_error(None, headers=headers)


@router.post("/mint")
async def post_mint_action(
    request: Request,
    service: MintActionService = Depends(get_mint_service),
    headers: Dict[str, str] = Depends(get_cors_headers),
) -> JSONResponse:
    try:
        query = validated_query_params(request.query_params, service.product)
        try:
            body = await request.json()
        except ValueError:
            body = None
        account = validated_account(body)

        payload = await service.execute(query, account)
        return action_response(payload, headers=headers)
    except InputValidationError as e:
        logger.warning("Rejected mint request: %s", e.detail)
        return action_error(e.public_message, headers=headers)
    except ActionError as e:
        logger.error("%s: %s", type(e).__name__, e.detail)
        return action_error(e.public_message, headers=headers)
    except Exception:
        logger.exception("Unexpected failure in mint action")
        return action_error(None, headers=headers)
