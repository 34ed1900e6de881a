import logging
import uuid

from fastapi import APIRouter, Request
from pydantic import BaseModel

from apps.api.utils.replies import ConversationContext, get_welcome_message, respond, triage

logger = logging.getLogger(__name__)

router = APIRouter()


class ChatRequest(BaseModel):
    session_id: str | None = None
    message: str
    context: ConversationContext | None = None


@router.get("/welcome")
def welcome():
    return {"answer": get_welcome_message()}


@router.post("")
def chat(req: ChatRequest, request: Request):
    # nothing is stored; the widget keeps the transcript for the page session
    session_id = req.session_id or str(uuid.uuid4())

    answer = respond(req.message, req.context)
    intent, service = triage(req.message)
    intent = intent.value  # greetings and thanks report "general"

    request.state.selected_intent = intent
    request.state.detected_service = service
    logger.info("chat session=%s intent=%s service=%s", session_id, intent, service)

    return {
        "session_id": session_id,
        "answer": answer,
        "triage": {"intent": intent, "service": service},
    }
