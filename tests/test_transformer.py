import pytest

from slotform.inference.initform_inference import BuildErrorPolicy, DeferredErrorPolicy, NilFallbackPolicy
from slotform.inference.transformer import transform_slot, transform_slots
from slotform.inference.type_inference import GeneralTypeInference
from slotform.reader.parser import read
from slotform.types.environment import Environment
from slotform.types.errors import SlotInferenceError
from slotform.types.symbol import Symbol
from slotform.types.unsupplied_slot import UnsuppliedSlot

TYPES = GeneralTypeInference()
BUILD = BuildErrorPolicy()


@pytest.mark.parametrize(
    "source, expected",
    [
        # default and type: unchanged
        ('(label "x" :type string)', '(label "x" :type string)'),
        # default only: type appended
        ("(count 0)", "(count 0 :type integer-or-number)"),
        ("(ratio 0.5 :initarg :r)", "(ratio 0.5 :initarg :r :type float)"),
        ("(tags '())", "(tags '() :type list)"),
        # default only, not classifiable: unchanged
        ("(w (make-widget))", "(w (make-widget))"),
        # type only: zero value inserted
        ("(label :type string)", '(label "" :type string)'),
        ("(items :type list)", "(items (list) :type list)"),
        ("(on :type boolean)", "(on nil :type boolean)"),
        # neither: unchanged
        ("(handler)", "(handler)"),
        ("handler", "handler"),
    ],
)
def test_decision_table(source, expected):
    assert transform_slot(read(source), BUILD, TYPES) == read(expected)


def test_type_facet_disabled_leaves_defaulted_slot_alone():
    decl = read("(count 0)")
    assert transform_slot(decl, BUILD, None) is decl


def test_initform_facet_disabled_leaves_typed_slot_unbound():
    decl = read("(thing :type widget)")
    assert transform_slot(decl, None, TYPES) is decl


def test_fully_specified_slot_is_idempotent():
    decl = read("(count 1 :type integer-or-number)")
    once = transform_slot(decl, BUILD, TYPES)
    twice = transform_slot(once, BUILD, TYPES)
    assert once is decl
    assert twice is decl


def test_input_declaration_is_not_mutated():
    decl = read("(count 0)")
    result = transform_slot(decl, BUILD, TYPES)
    assert decl == read("(count 0)")
    assert result is not decl


def test_symbol_default_resolves_in_environment():
    env = Environment()
    env.define(Symbol("+limit+"), 10)
    assert transform_slot(read("(limit +limit+)"), BUILD, TYPES, env) == read(
        "(limit +limit+ :type integer-or-number)"
    )
    assert transform_slot(read("(limit +unbound+)"), BUILD, TYPES, env) == read("(limit +unbound+)")


def test_build_error_and_nil_fallback_diverge_on_same_input():
    decl = read("(thing :type widget)")
    with pytest.raises(SlotInferenceError):
        transform_slot(decl, BuildErrorPolicy(), TYPES)
    assert transform_slot(decl, NilFallbackPolicy(), TYPES) == read("(thing :type widget)")


def test_deferred_error_inserts_trap():
    result = transform_slot(read("(thing :type widget)"), DeferredErrorPolicy(), TYPES)
    name, default, *options = result
    assert name == Symbol("thing")
    assert isinstance(default, UnsuppliedSlot)
    assert options == [Symbol(":type"), Symbol("widget")]


def test_transform_slots_keeps_order():
    decls = read('(a (b 1) (c :type string) (d "x" :type string))')
    assert transform_slots(decls, BUILD, TYPES) == read(
        '(a (b 1 :type integer-or-number) (c "" :type string) (d "x" :type string))'
    )


def test_uncovered_state_is_an_invariant_error(monkeypatch):
    from slotform.inference import transformer
    from slotform.inference.slot_spec import SlotSpec
    from slotform.types.errors import InferenceInvariantError

    class Broken(SlotSpec):
        @property
        def has_type(self):
            return None

    monkeypatch.setattr(transformer, "parse_slot", lambda decl: Broken(Symbol("x"), has_default=True, default=0))
    with pytest.raises(InferenceInvariantError):
        transform_slot(read("(x 0)"), BUILD, TYPES)
