"""Core data contracts for Firefly Forge."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping, Optional, Sequence, Union

from .utils import detect_media_type


RequestMode = Literal["reference", "file", "base64"]
RenderType = Literal["image", "base64", "reference"]
OutcomeKind = Literal["images", "outputs", "reference", "api_error", "malformed"]
Severity = Literal["primary", "secondary", "success", "danger", "warning", "info"]


@dataclass(frozen=True)
class UploadFile:
    data: bytes
    media_type: str
    filename: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "UploadFile":
        resolved = Path(path).expanduser().resolve()
        data = resolved.read_bytes()
        return cls(data=data, media_type=detect_media_type(data, resolved.name), filename=resolved.name)


@dataclass
class FormState:
    prompt: Optional[str] = None
    image_id: Optional[str] = None
    mask_id: Optional[str] = None
    file: Optional[UploadFile] = None


@dataclass(frozen=True)
class ImageReference:
    id: Optional[str]
    presigned_url: Optional[str] = None


@dataclass(frozen=True)
class ResultItem:
    image: Optional[ImageReference] = None
    base64: Optional[str] = None
    seed: Optional[Union[int, float]] = None
    id: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ResultItem":
        image = payload.get("image")
        reference = None
        if isinstance(image, Mapping):
            reference = ImageReference(id=image.get("id"), presigned_url=image.get("presignedUrl"))
        return cls(
            image=reference,
            base64=payload.get("base64"),
            seed=payload.get("seed"),
            id=payload.get("id"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ApiOutcome:
    kind: OutcomeKind
    items: Sequence[ResultItem] = ()
    error_code: Optional[str] = None
    message: Optional[str] = None
    raw: Any = None

    @property
    def ok(self) -> bool:
        return self.kind in {"images", "outputs", "reference"}


@dataclass(frozen=True)
class Alert:
    message: str
    severity: Severity = "danger"


@dataclass(frozen=True)
class ImageCard:
    src: str
    text: str
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class ReferenceDisplay:
    text: str


RenderedElement = Union[ImageCard, ReferenceDisplay]


@dataclass(frozen=True)
class Operation:
    name: str
    label: str
    endpoint: str
    mode: RequestMode
    result_field: Literal["images", "outputs"]
    render_type: RenderType
