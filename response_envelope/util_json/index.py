from __future__ import annotations
from typing import Any
import json
import math

def _finite(obj: Any, _path: frozenset = frozenset()) -> Any:
    # NaN/Infinity не JSON: как JSON.stringify, заменяем на null
    if isinstance(obj, float): return None if not math.isfinite(obj) else obj
    if id(obj) in _path: return obj
    if isinstance(obj, dict):
        path = _path | {id(obj)}
        return {k: _finite(v, path) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        path = _path | {id(obj)}
        return [_finite(v, path) for v in obj]
    return obj

def dumps_compact(obj: Any) -> str:
    # не бросает: неподдерживаемые значения уходят в str()
    kw = dict(ensure_ascii=False, separators=(",", ":"), default=str, allow_nan=False)
    try: return json.dumps(obj, **kw)
    except (TypeError, ValueError): pass
    try: return json.dumps(_finite(obj), **kw)
    except (TypeError, ValueError): return json.dumps(str(obj), ensure_ascii=False)
