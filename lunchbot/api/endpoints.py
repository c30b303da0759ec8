# lunchbot/api/endpoints.py

import hmac
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from lunchbot.core.config import Settings, get_settings
from lunchbot.core.errors import BodyReadFailure, MethodNotAllowed, Unauthorized
from lunchbot.services.command_service import Parameter, form_value, parse_form, run_command
from lunchbot.services.restaurant_service import RestaurantStore, get_restaurant_store

logger = logging.getLogger(__name__)

router = APIRouter()

# Every method is routed here so the handler, not the router, answers non-POST requests.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def verify_token(token: str, settings: Settings) -> None:
    # An unset SLACK_TOKEN rejects everything rather than accepting a missing token.
    if not settings.slack_token or not hmac.compare_digest(token.encode(), settings.slack_token.encode()):
        raise Unauthorized()


@router.api_route("/slack/lunch", methods=ALL_METHODS, response_class=PlainTextResponse)
async def lunch_command(
    req: Request,
    settings: Settings = Depends(get_settings),
    store: RestaurantStore = Depends(get_restaurant_store),
):
    """
    The single endpoint Slack posts the /lunch slash command to.
    Supports `add <name>` and `list`; every response is plain text.
    """
    if req.method != "POST":
        raise MethodNotAllowed()

    try:
        body = (await req.body()).decode("utf-8")
    except (ClientDisconnect, UnicodeDecodeError) as e:
        raise BodyReadFailure(str(e) or "client disconnected") from e

    form = parse_form(body)
    verify_token(form_value(form, "token"), settings)

    parameter = Parameter.parse(form_value(form, "text"))
    logger.info("Received sub-command %r", parameter.sub_command)

    # Datastore calls block, so keep them off the event loop.
    result = await run_in_threadpool(run_command, parameter, store)
    return PlainTextResponse(result)
