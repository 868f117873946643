import logging

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from chatlens.core.config import get_settings
from chatlens.schemas.chat import ChatParseResponse, ChatSummaryRead, ChatTextRequest, DateIndexRead
from chatlens.services.parsing import build_date_index, parse_chat
from chatlens.services.uploads import read_upload_text

router = APIRouter(prefix="/chats", tags=["chats"])
logger = logging.getLogger(__name__)

NO_MESSAGES_DETAIL = "No messages found. Make sure this is a chat export .txt file."


def _build_response(text: str, source: str) -> ChatParseResponse:
    summary = parse_chat(text, fallback_name=get_settings().fallback_chat_name)
    if summary.is_empty:
        logger.warning("chat_parse_empty", extra={"source": source, "text_length": len(text)})
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=NO_MESSAGES_DETAIL)
    return ChatParseResponse(
        chat=ChatSummaryRead.from_summary(summary),
        date_index=DateIndexRead.from_index(build_date_index(summary)),
    )


@router.post("/parse", response_model=ChatParseResponse)
async def parse_upload(file: UploadFile = File(...)) -> ChatParseResponse:
    text = await read_upload_text(file)
    return _build_response(text, source="upload")


@router.post("/parse-text", response_model=ChatParseResponse)
def parse_text(payload: ChatTextRequest) -> ChatParseResponse:
    return _build_response(payload.text, source="text")
