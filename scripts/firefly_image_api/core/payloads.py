"""Operation table and request payload builders."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .contracts import Operation
from .utils import random_seed_value


TEXT_TO_IMAGE = Operation(
    name="text-to-image",
    label="TEXT TO IMAGE",
    endpoint="/v1/images/generations",
    mode="base64",
    result_field="images",
    render_type="base64",
)
GENERATIVE_MATCH = Operation(
    name="match",
    label="GENERATIVE MATCH",
    endpoint="/v2/images/generate",
    mode="reference",
    result_field="outputs",
    render_type="image",
)
GENERATIVE_EXPAND = Operation(
    name="expand",
    label="GENERATIVE EXPAND",
    endpoint="/v1/images/expand",
    mode="reference",
    result_field="images",
    render_type="image",
)
GENERATIVE_FILL = Operation(
    name="fill",
    label="GENERATIVE FILL",
    endpoint="/v1/images/fill",
    mode="reference",
    result_field="images",
    render_type="image",
)
UPLOAD_IMAGE = Operation(
    name="upload",
    label="FILE UPLOAD",
    endpoint="/v2/storage/image",
    mode="file",
    result_field="images",
    render_type="reference",
)

OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (TEXT_TO_IMAGE, GENERATIVE_MATCH, GENERATIVE_EXPAND, GENERATIVE_FILL, UPLOAD_IMAGE)
}

EXPAND_SIZE = {"width": 1792, "height": 1024}


def get_operation(name: str) -> Operation:
    key = name.strip().lower()
    if key not in OPERATIONS:
        raise ValueError(f"Unknown operation '{name}'")
    return OPERATIONS[key]


def text_to_image_payload(prompt: str) -> Dict[str, Any]:
    return {
        "prompt": prompt,
        "size": "1024x1024",
        "n": 1,
        "seeds": [1],
        "contentClass": None,
        "styles": ["concept art", "splattering"],
    }


def generative_match_payload(
    prompt: str,
    image_id: str,
    seed_source: Optional[Callable[[], float]] = None,
) -> Dict[str, Any]:
    draw = seed_source or random_seed_value
    return {
        "prompt": prompt,
        "negativePrompt": "Flowers, people.",
        "contentClass": "photo",
        "n": 2,
        "seeds": [draw(), draw()],
        "size": {"width": 2048, "height": 2048},
        "photoSettings": {
            "aperture": 1.2,
            "shutterSpeed": 0.0005,
            "fieldOfView": 14,
        },
        "styles": {
            "presets": [],
            "referenceImage": {"id": image_id},
            "strength": 60,
        },
        "visualIntensity": 6,
        "locale": "en-US",
    }


def generative_expand_payload(prompt: str, image_id: str) -> Dict[str, Any]:
    return {
        "prompt": prompt,
        "n": 1,
        "image": {"id": image_id},
        "size": dict(EXPAND_SIZE),
    }


def generative_fill_payload(prompt: str, image_id: str, mask_id: str) -> Dict[str, Any]:
    return {
        "prompt": prompt,
        "n": 1,
        "size": dict(EXPAND_SIZE),
        "image": {"id": image_id},
        "mask": {"id": mask_id},
    }
