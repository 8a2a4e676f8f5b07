"""
Merge helpers for schemas and options.

Two flavours are provided:
- mixin: shallow, in-place merge used to overlay caller options on defaults
- deep_merge / merge_all: recursive merge for deriving schema variants from a
  shared base (a strict overlay, a per-endpoint tightening)

Deep merge rules:
- Mappings are recursively merged
- Lists are replaced (not concatenated)
- Scalars use last-wins semantics
- None can override non-None values

Example:
    >>> from docschema.merge import mixin, deep_merge
    >>> mixin({}, {"cast": False}, {"cast": True})
    {'cast': True}
    >>> deep_merge({"properties": {"a": {"type": "string"}}},
    ...            {"properties": {"b": {"type": "number"}}})
    {'properties': {'a': {'type': 'string'}, 'b': {'type': 'number'}}}
"""

from collections.abc import Mapping
from typing import Any, Dict, List, MutableMapping, Optional
import copy


def mixin(target: MutableMapping[str, Any], *sources: Optional[Mapping]) -> MutableMapping[str, Any]:
    """
    Copy the top-level keys of each source onto ``target``, in order.

    ``None`` sources are skipped. Later sources win.

    Args:
        target: Mapping that receives the keys (modified in place)
        *sources: Mappings to copy from

    Returns:
        ``target``

    Raises:
        TypeError: If a source is not a mapping
    """
    for source in sources:
        if source is None:
            continue
        if not isinstance(source, Mapping):
            raise TypeError(f"mixin non-mapping: {type(source).__name__}")
        for key, value in source.items():
            target[key] = value
    return target


def deep_merge(
    base: Optional[Dict[str, Any]],
    overlay: Optional[Dict[str, Any]]
) -> Optional[Dict[str, Any]]:
    """
    Layer ``overlay`` on top of ``base`` to derive a schema variant.

    Nested ``properties`` mappings merge key by key, so an overlay can
    tighten one property without restating its siblings. Lists such as
    ``enum``, ``type`` or ``dependencies`` are replaced whole. Neither
    input is modified.

    Args:
        base: Base schema (lower priority). Can be None.
        overlay: Overlay schema (higher priority). Can be None.

    Returns:
        Merged schema. Returns None if overlay is None.

    Examples:
        >>> deep_merge({"properties": {"town": {"type": "string"}}},
        ...            {"properties": {"town": {"maxLength": 40}}})
        {'properties': {'town': {'type': 'string', 'maxLength': 40}}}
        >>> deep_merge({"enum": ["orange", "cigar"]}, {"enum": ["apple"]})
        {'enum': ['apple']}
    """
    if overlay is None:
        return None

    if base is None:
        return copy.deepcopy(overlay)

    if not isinstance(base, dict) or not isinstance(overlay, dict):
        return copy.deepcopy(overlay) if isinstance(overlay, dict) else overlay

    result = copy.deepcopy(base)

    for key, overlay_value in overlay.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(overlay_value, dict):
            result[key] = deep_merge(base_value, overlay_value)
        elif isinstance(overlay_value, (dict, list)):
            result[key] = copy.deepcopy(overlay_value)
        else:
            result[key] = overlay_value

    return result


def merge_all(schemas: List[Optional[Dict[str, Any]]]) -> Dict[str, Any]:
    """
    Merge schema layers in order (first is lowest priority, last is highest).

    Typical layers are a shared base schema, a per-document variant and
    a strict overlay such as ``{"additionalProperties": False}``. None
    entries are skipped.

    Example:
        >>> merge_all([{"properties": {"town": {"type": "string"}}}, None,
        ...            {"additionalProperties": False}])
        {'properties': {'town': {'type': 'string'}}, 'additionalProperties': False}
    """
    layers = [s for s in schemas if s is not None]
    if not layers:
        return {}

    result = copy.deepcopy(layers[0])
    for layer in layers[1:]:
        result = deep_merge(result, layer)

    return result if result is not None else {}
