import logging
import traceback
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from veoprompt.config.config import init_env, load_config
from veoprompt.prompt.errors import PromptGenerationError
from veoprompt.prompt.models import (
    AUTOMATIC,
    CAMERA_MOVEMENT_OPTIONS,
    TONE_OPTIONS,
    FormState,
    ReferenceImage,
    TimedEntry,
)
from veoprompt.prompt.normalizer import resolve_preference
from veoprompt.prompt.requester import generate_veo_prompt
from veoprompt.utils.logging_setup import configure_logging_from_config, log_context

init_env()
config = load_config()

configure_logging_from_config(config)
logger = logging.getLogger(__name__)

app = FastAPI(title="Veo Prompt Generator API", version="0.1.0")

# CORS middleware setting
app.add_middleware(
    CORSMiddleware,
    allow_origins=config["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TimedEntryIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    startTime: str = ""
    endTime: str = ""
    text: str = Field("", validation_alias=AliasChoices("text", "description", "dialogueText"))

    def to_entry(self) -> TimedEntry:
        return TimedEntry(start_time=self.startTime, end_time=self.endTime, text=self.text)


class ImageIn(BaseModel):
    data: str
    mimeType: str


class GenerateRequest(BaseModel):
    actions: List[TimedEntryIn] = []
    timedDialogues: List[TimedEntryIn] = []
    cameraMovement: str = AUTOMATIC
    tone: str = AUTOMATIC
    customCameraMovement: Optional[str] = None
    customTone: Optional[str] = None
    image: Optional[ImageIn] = None
    request_id: Optional[str] = None


class GenerateResponse(BaseModel):
    success: bool
    prompt: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


def _to_form(request: GenerateRequest) -> FormState:
    image = None
    if request.image is not None:
        image = ReferenceImage(data=request.image.data, mime_type=request.image.mimeType)
    return FormState(
        actions=[a.to_entry() for a in request.actions],
        timed_dialogues=[d.to_entry() for d in request.timedDialogues],
        camera_movement=resolve_preference(request.cameraMovement, request.customCameraMovement),
        tone=resolve_preference(request.tone, request.customTone),
        image=image,
    )


@app.post("/prompt/generate", response_model=GenerateResponse)
def generate(request: GenerateRequest):
    """
    Build a Veo prompt from the submitted timelines, image and preferences.

    One upstream model call per request; nothing is retried or cached.
    """
    request_id = request.request_id or uuid.uuid4().hex[:12]
    with log_context(request_id=request_id, stage="generate"):
        logger.info(
            f"POST /prompt/generate - actions: {len(request.actions)}, "
            f"dialogues: {len(request.timedDialogues)}, image: {request.image is not None}"
        )
        try:
            form = _to_form(request)
            prompt_json = generate_veo_prompt(form, config=config)
        except PromptGenerationError as e:
            logger.error(f"Prompt generation failed: {e.message}")
            raise HTTPException(status_code=e.status_code, detail=e.message)
        except Exception as e:
            logger.error(f"Error processing generate request: {e}")
            logger.error(traceback.format_exc())
            raise HTTPException(status_code=500, detail=str(e) or "An unexpected error occurred.")

    return GenerateResponse(success=True, prompt=prompt_json)


@app.get("/options")
async def options():
    return {
        "cameraMovement": list(CAMERA_MOVEMENT_OPTIONS),
        "tone": list(TONE_OPTIONS),
    }


@app.get("/health")
async def health():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat()
    )


@app.get("/")
async def root():
    return {"message": "Veo Prompt Generator API is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config["server_host"], port=config["server_port"])
