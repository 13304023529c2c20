"""Render Lisp data back into Lisp source text.

Used for error messages, reprs and log records, e.g. a transformed slot
declaration prints as (count 0 :type integer-or-number).
"""

from __future__ import annotations

import json

from slotform import SExpression
from slotform.types.nil import NilType
from slotform.types.symbol import Symbol
from slotform.types.vector import Vector


def to_lisp(obj: SExpression) -> str:
    match obj:
        case NilType():
            return "nil"
        case Symbol():
            return obj.id
        case bool():
            return "#t" if obj else "#f"
        case str():
            return json.dumps(obj)
        case Vector():
            return "#(" + " ".join(to_lisp(x) for x in obj) + ")"
        case list():
            return "(" + " ".join(to_lisp(x) for x in obj) + ")"
        case (list() as items, tail):
            # dotted list
            return "(" + " ".join(to_lisp(x) for x in items) + " . " + to_lisp(tail) + ")"
        case dict():
            inner = " ".join(f"{to_lisp(k)} {to_lisp(v)}" for k, v in obj.items())
            return "{" + inner + "}"
        case complex():
            return f"#C({to_lisp(obj.real)} {to_lisp(obj.imag)})"
        case _:
            return str(obj)
