from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from .domain import Annotation, ContentUnit
from .exceptions import ContentDecodeError
from .models import AnnotationModel, ContentDocument, RegistryConfig
from .rendering.registry import (
    AnnotationRegistry,
    build_default_registry,
    template_markup,
)

LOGGER = logging.getLogger(__name__)

Source = Union[str, bytes, bytearray, Mapping[str, Any]]


def _load_json(raw: Source) -> Any:
    """Accepts JSON text, raw (optionally gzipped) bytes, or a parsed mapping."""
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        blob = bytes(raw)
        if len(blob) >= 2 and blob[0] == 0x1F and blob[1] == 0x8B:
            LOGGER.debug("annotext.decoder.gzip len=%d", len(blob))
            blob = gzip.decompress(blob)
        raw = blob.decode("utf-8")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        LOGGER.debug("annotext.decoder.json_fail %s", e)
        raise ContentDecodeError(f"invalid JSON: {e}") from e


def read_source(path: Union[str, Path]) -> bytes:
    return Path(path).read_bytes()


class ContentDecoder:
    """Decode a linear-data document into content units.

    Keys of the document's ``annotations`` table become one shared
    ``Annotation`` each, so every unit referring to the same key carries the
    same instance. Inline annotation objects become a new instance at every
    occurrence.
    """

    def decode(self, raw: Source) -> List[ContentUnit]:
        data = _load_json(raw)
        try:
            doc = ContentDocument.model_validate(data)
        except ValidationError as e:
            LOGGER.debug("annotext.decoder.validation_fail errors=%d", e.error_count())
            raise ContentDecodeError(f"invalid document: {e}", payload=data) from e
        return self.decode_document(doc)

    def decode_document(self, doc: ContentDocument) -> List[ContentUnit]:
        shared: Dict[str, Annotation] = {
            key: Annotation(type=model.type, data=dict(model.data))
            for key, model in doc.annotations.items()
        }
        LOGGER.debug(
            "annotext.decoder.document units=%d shared=%d", len(doc.data), len(shared)
        )
        units: List[ContentUnit] = []
        for pos, item in enumerate(doc.data):
            if isinstance(item, str):
                units.append(ContentUnit(item))
                continue
            char = item[0]
            refs: List[Annotation] = []
            for ref in item[1:]:
                if isinstance(ref, AnnotationModel):
                    refs.append(Annotation(type=ref.type, data=dict(ref.data)))
                    continue
                try:
                    refs.append(shared[ref])
                except KeyError:
                    raise ContentDecodeError(
                        f"unit {pos}: unknown annotation reference {ref!r}",
                        payload=item,
                    ) from None
            try:
                units.append(ContentUnit(char, tuple(refs)))
            except ValueError as e:
                raise ContentDecodeError(f"unit {pos}: {e}", payload=item) from e
        return units


def decode_registry(
    raw: Source, base: Optional[AnnotationRegistry] = None
) -> AnnotationRegistry:
    """Build a frozen registry from a rule file.

    Rules extend ``base`` (the built-in rules when omitted) unless the file
    sets ``replace_defaults``.
    """
    data = _load_json(raw)
    try:
        cfg = RegistryConfig.model_validate(data)
    except ValidationError as e:
        raise ContentDecodeError(f"invalid registry config: {e}", payload=data) from e

    if cfg.replace_defaults:
        registry = AnnotationRegistry()
    elif base is not None:
        registry = base.copy()
    else:
        registry = build_default_registry()

    for type_, rule in cfg.rules.items():
        if rule.template:
            try:
                open_, close = template_markup(rule.open), template_markup(rule.close)
            except ValueError as e:
                raise ContentDecodeError(
                    f"rule {type_!r}: {e}", payload=rule.model_dump()
                ) from e
            registry.register(type_, open_, close)
        else:
            registry.register(type_, rule.open, rule.close)
    LOGGER.debug(
        "annotext.decoder.registry rules=%d total=%d", len(cfg.rules), len(registry)
    )
    return registry.freeze()


def load_document(path: Union[str, Path]) -> List[ContentUnit]:
    return ContentDecoder().decode(read_source(path))


def load_registry(path: Union[str, Path]) -> AnnotationRegistry:
    return decode_registry(read_source(path))
