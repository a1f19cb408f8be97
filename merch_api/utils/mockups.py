import json
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from PIL import Image, UnidentifiedImageError

from ..errors import (
    DecodeError,
    FetchError,
    PerProductFetchError,
    SourceFetchError,
    UnknownPlacementError,
)

log = logging.getLogger(__name__)

# Overlay the result image onto each product's base photo at a fixed box per product type


@dataclass(frozen=True)
class PlacementRule:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "PlacementRule":
        values = {}
        for key in ("x", "y", "width", "height"):
            v = data.get(key) if isinstance(data, Mapping) else None
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise ValueError(f"placement {name!r}: {key} must be a non-negative integer, got {v!r}")
            values[key] = v
        if values["width"] == 0 or values["height"] == 0:
            raise ValueError(f"placement {name!r}: width and height must be positive")
        return cls(**values)


@dataclass(frozen=True)
class ProductRequest:
    id: Any
    name: str | None
    base_image_url: str | None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ProductRequest":
        return cls(id=data.get("id"), name=data.get("name"), base_image_url=data.get("baseImageUrl"))


@dataclass(frozen=True)
class CompositeResult:
    product_id: Any
    product_name: str
    image_bytes: bytes


@dataclass(frozen=True)
class SkippedProduct:
    product_id: Any
    product_name: str | None
    error: Exception


def load_placements(mapping: Mapping[str, Mapping[str, Any]]) -> Mapping[str, PlacementRule]:
    """Validate a raw placement table and freeze it."""
    return MappingProxyType({name: PlacementRule.from_dict(name, rule) for name, rule in mapping.items()})


def load_placements_file(path: str | Path) -> Mapping[str, PlacementRule]:
    with Path(path).open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: placement file must contain a JSON object")
    return load_placements(raw)


def _open_rgba(data: bytes, what: str) -> Image.Image:
    try:
        with Image.open(BytesIO(data)) as img:
            return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeError(f"cannot decode {what}: {e}") from e


def composite_onto(source_bytes: bytes, base_bytes: bytes, rule: PlacementRule) -> bytes:
    """Stretch the source to the rule's box and alpha-composite it onto the base at (x, y).

    The box is not checked against the base size; anything past the edge is clipped.
    Returns PNG bytes.
    """
    return _composite(_open_rgba(source_bytes, "result image"), base_bytes, rule)


def _composite(design: Image.Image, base_bytes: bytes, rule: PlacementRule) -> bytes:
    template = _open_rgba(base_bytes, "base image")

    d_resized = design.resize((rule.width, rule.height), Image.LANCZOS)

    composite = template.copy()
    composite.alpha_composite(d_resized, dest=(rule.x, rule.y))

    buf = BytesIO()
    composite.save(buf, "PNG")
    return buf.getvalue()


class _DecodedSource:
    """The result image decoded once per batch, or the reason it could not be."""

    def __init__(self, data: bytes):
        self.image = None
        self.error = None
        try:
            self.image = _open_rgba(data, "result image")
        except DecodeError as e:
            self.error = e

    def get(self) -> Image.Image:
        if self.error is not None:
            raise DecodeError(self.error.message)
        return self.image


def generate_mockups(
    source_url: str,
    products: Iterable[ProductRequest],
    *,
    fetch_image: Callable[[str], bytes],
    placements: Mapping[str, PlacementRule],
    on_skip: Callable[[SkippedProduct], None] | None = None,
) -> list[CompositeResult]:
    """Build one composite per product, in input order.

    The source image is fetched once; if that fails the whole batch raises
    SourceFetchError. Per-product problems (unknown type, unreachable base image,
    undecodable bytes) skip that product, are logged, and are passed to ``on_skip``.
    An undecodable source therefore skips every product rather than failing the batch.
    """
    try:
        source_bytes = fetch_image(source_url)
    except FetchError as e:
        raise SourceFetchError(f"Failed to fetch result image: {e.message or e}") from e

    source = _DecodedSource(source_bytes)
    results: list[CompositeResult] = []
    for product in products:
        try:
            results.append(_mockup_for_product(source, product, fetch_image, placements))
        except (UnknownPlacementError, PerProductFetchError, DecodeError) as e:
            log.warning("Skipping mockup for product %s (%s): %s", product.id, product.name, e)
            if on_skip is not None:
                on_skip(SkippedProduct(product_id=product.id, product_name=product.name, error=e))
    return results


def _mockup_for_product(
    source: _DecodedSource,
    product: ProductRequest,
    fetch_image: Callable[[str], bytes],
    placements: Mapping[str, PlacementRule],
) -> CompositeResult:
    rule = placements.get(product.name) if isinstance(product.name, str) else None
    if rule is None:
        raise UnknownPlacementError(f"No overlay config defined for product {product.name}")

    try:
        base_bytes = fetch_image(product.base_image_url)
    except FetchError as e:
        raise PerProductFetchError(f"Failed to fetch base image for product {product.name}: {e.message or e}") from e

    return CompositeResult(
        product_id=product.id,
        product_name=product.name,
        image_bytes=_composite(source.get(), base_bytes, rule),
    )
