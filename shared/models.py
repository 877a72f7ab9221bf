from pydantic import BaseModel, Field

from .config import config
from .enums import Audience, ExportFormat, Language, SlideFlag, SourceFormat, Tone


def _default_total_seconds() -> int:
    return int(config.get("default_total_seconds", 420))


def _default_qa_buffer_seconds() -> int:
    return int(config.get("default_qa_buffer_seconds", 30))


# Project models
class StyleVector(BaseModel):
    """Delivery style axes, each in [-2, +2]."""

    brevity: int = Field(default=0, ge=-2, le=2)
    energy: int = Field(default=0, ge=-2, le=2)
    pace: int = Field(default=0, ge=-2, le=2)


class ProjectSettings(BaseModel):
    total_seconds: int = Field(default_factory=_default_total_seconds, gt=0, description="Total talk length")
    qa_buffer_seconds: int = Field(
        default_factory=_default_qa_buffer_seconds, ge=0, description="Time reserved for Q&A"
    )
    audience: Audience = Field(default=Audience.INTERNAL)
    tone: Tone = Field(default=Tone.POLITE)
    style: StyleVector = Field(default_factory=StyleVector)
    language: Language = Field(default=Language.JA)

    @property
    def available_seconds(self) -> int:
        """Speaking time left once the Q&A buffer is reserved."""
        return self.total_seconds - self.qa_buffer_seconds


class SettingsPatch(BaseModel):
    """Partial settings; only provided fields replace the current values."""

    total_seconds: int | None = Field(default=None, gt=0)
    qa_buffer_seconds: int | None = Field(default=None, ge=0)
    audience: Audience | None = None
    tone: Tone | None = None
    style: StyleVector | None = None
    language: Language | None = None

    def apply_to(self, settings: ProjectSettings) -> ProjectSettings:
        """Return a copy of settings with the provided fields replaced."""
        updates = {key: value for key, value in self.model_dump(exclude_unset=True).items() if value is not None}
        return ProjectSettings.model_validate({**settings.model_dump(), **updates})


class ProjectSource(BaseModel):
    file_id: str
    file_name: str | None = None
    mime_type: str | None = None


class ProjectStats(BaseModel):
    slide_count: int = 0
    allocated_seconds: int = 0
    over_by_seconds: int = 0


class Project(BaseModel):
    project_id: str
    title: str
    source: ProjectSource | None = None
    settings: ProjectSettings = Field(default_factory=ProjectSettings)
    stats: ProjectStats = Field(default_factory=ProjectStats)


# Slide models
class SlideTiming(BaseModel):
    seconds: int = Field(default=30, ge=0)
    locked: bool = False
    min_seconds: int = Field(default=10, ge=0)
    max_seconds: int = Field(default=120, ge=0)


class SlideScript(BaseModel):
    goal: str = ""
    talk_track: str = ""
    key_points: list[str] = Field(default_factory=list)
    transition_in: str | None = None
    transition_out: str | None = None


class RawContent(BaseModel):
    text: str


class Slide(BaseModel):
    slide_id: str
    index: int = Field(..., ge=0)
    title_guess: str
    raw: RawContent
    timing: SlideTiming = Field(default_factory=SlideTiming)
    script: SlideScript = Field(default_factory=SlideScript)
    flags: list[SlideFlag] = Field(default_factory=list)


class ProjectSnapshot(BaseModel):
    """A project together with its ordered slides."""

    project: Project
    slides: list[Slide] = Field(default_factory=list)

    def find_slide(self, slide_id: str) -> Slide | None:
        return next((slide for slide in self.slides if slide.slide_id == slide_id), None)


# Patch models
class TimingPatch(BaseModel):
    seconds: int | None = Field(default=None, ge=0)
    locked: bool | None = None
    min_seconds: int | None = Field(default=None, ge=0)
    max_seconds: int | None = Field(default=None, ge=0)


class ScriptPatch(BaseModel):
    goal: str | None = None
    talk_track: str | None = None
    key_points: list[str] | None = None
    transition_in: str | None = None
    transition_out: str | None = None


class SlidePatch(BaseModel):
    timing: TimingPatch | None = None
    script: ScriptPatch | None = None
    flags: list[SlideFlag] | None = None


# Request/Response Models
class DeckFile(BaseModel):
    download_url: str = Field(..., description="Where the uploaded deck can be fetched from")
    file_id: str = Field(..., description="Identifier of the uploaded file")


class IngestRequest(BaseModel):
    title: str | None = Field(None, description="Presentation title")
    settings: SettingsPatch | None = None
    deck_file: DeckFile


class IngestTextRequest(BaseModel):
    title: str | None = Field(None, description="Presentation title")
    settings: SettingsPatch | None = None
    text: str = Field(..., description="Already decoded deck text")
    source_format: SourceFormat = Field(default=SourceFormat.GENERIC)


class SynthesizeRequest(BaseModel):
    settings: SettingsPatch | None = None


class PatchSlideRequest(BaseModel):
    patch: SlidePatch


class RebalanceRequest(BaseModel):
    total_seconds: int | None = Field(None, gt=0, description="New total talk length")


class ExportScriptResponse(BaseModel):
    project_id: str
    format: ExportFormat
    content: str


class Segment(BaseModel):
    """One slide-sized block of deck text."""

    text: str
    title_guess: str


class AllocationResult(BaseModel):
    """Summary of a rebalancing pass."""

    target_seconds: int
    available_seconds: int
    remaining_seconds: int
    locked_count: int
    unlocked_count: int
    redistributed: bool
