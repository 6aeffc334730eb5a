from __future__ import annotations
import dataclasses
import types
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Type, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T")

Entry = Dict[str, Any]


def flatten_mapping(mapping: Mapping[Any, Any]) -> List[Entry]:
	"""Mapping -> ordered list of {"key", "value"} entries."""
	return [{"key": k, "value": v} for k, v in mapping.items()]


def rebuild_mapping(entries: List[Entry]) -> Dict[Any, Any]:
	out: Dict[Any, Any] = {}
	for entry in entries:
		try:
			out[entry["key"]] = entry["value"]
		except (KeyError, TypeError):
			raise ValueError(f"malformed mapping entry: {entry!r}") from None
	return out


def to_record(value: Any) -> Any:
	"""Plain JSON-ready structure: enums as values, every mapping flattened."""
	if dataclasses.is_dataclass(value) and not isinstance(value, type):
		return {f.name: to_record(getattr(value, f.name)) for f in dataclasses.fields(value)}
	if isinstance(value, Enum):
		return value.value
	if isinstance(value, Mapping):
		return flatten_mapping({to_record(k): to_record(v) for k, v in value.items()})
	if isinstance(value, (list, tuple)):
		return [to_record(v) for v in value]
	return value


@lru_cache(maxsize=None)
def _hints(cls: type) -> Dict[str, Any]:
	return get_type_hints(cls)


def _is_union(origin: Any) -> bool:
	return origin is Union or origin is types.UnionType


def _rebuild(tp: Any, raw: Any) -> Any:
	if raw is None:
		return None
	origin = get_origin(tp)
	args = get_args(tp)
	if _is_union(origin):
		options = [a for a in args if a is not type(None)]
		return _rebuild(options[0], raw) if len(options) == 1 else raw
	if origin in (dict, Dict, Mapping):
		key_t, value_t = args if args else (Any, Any)
		return {_rebuild(key_t, k): _rebuild(value_t, v) for k, v in rebuild_mapping(raw).items()}
	if origin in (list, List):
		(item_t,) = args if args else (Any,)
		return [_rebuild(item_t, v) for v in raw]
	if origin is tuple:
		return tuple(_rebuild(a, v) for a, v in zip(args, raw))
	if tp is Any:
		return raw
	if isinstance(tp, type):
		if dataclasses.is_dataclass(tp):
			return from_record(tp, raw)
		if issubclass(tp, Enum):
			return tp(raw)
		if tp is float:
			return float(raw)
		if tp in (int, bool, str):
			return tp(raw)
	return raw


def from_record(cls: Type[T], record: Mapping[str, Any]) -> T:
	"""Inverse of to_record for any entity dataclass."""
	if not dataclasses.is_dataclass(cls):
		raise TypeError(f"{cls!r} is not a dataclass")
	hints = _hints(cls)
	kwargs = {
		f.name: _rebuild(hints[f.name], record[f.name])
		for f in dataclasses.fields(cls)
		if f.init and f.name in record
	}
	return cls(**kwargs)
