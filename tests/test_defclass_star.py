import pytest

from slotform.config import InferenceConfig
from slotform.inference.defclass_star import (
    define_class,
    expand_defclass_star,
    resolve_initform_policy,
    resolve_type_policy,
    split_options,
)
from slotform.inference.initform_inference import BuildErrorPolicy, NilFallbackPolicy
from slotform.inference.type_inference import GeneralTypeInference
from slotform.reader.parser import read
from slotform.types.errors import (
    SlotInferenceError,
    SlotformArityError,
    SlotformNameError,
    SlotformTypeError,
    SlotformUnboundSymbol,
    UnboundSlotError,
)
from slotform.types.nil import Nil
from slotform.types.symbol import Symbol
from slotform.types.unsupplied_slot import UnsuppliedSlot


def expand(source, config=None, env=None):
    return expand_defclass_star(read(source)[1:], env, config or InferenceConfig())


def test_expansion_targets_defclass():
    assert expand("(defclass* point (base) ((x 0) (label :type string) (handler)))") == read(
        '(defclass point (base) ((x 0 :type integer-or-number) (label "" :type string) (handler)))'
    )


def test_inference_options_are_stripped_and_others_pass_through():
    form = expand(
        "(defclass* c () ((x 0)) (:documentation \"doc\") (:type-inference nil) (:initform-inference :nil-fallback))"
    )
    assert form == read('(defclass c () ((x 0)) (:documentation "doc"))')


def test_option_overrides_initform_policy():
    source = "(defclass* c () ((thing :type widget)) (:initform-inference :nil-fallback))"
    assert expand(source) == read("(defclass c () ((thing :type widget)))")


def test_quoted_and_plain_selectors_are_accepted():
    for option in ("(:initform-inference 'nil-fallback)", "(:initform-inference nil-fallback)"):
        assert expand(f"(defclass* c () ((thing :type widget)) {option})") == read(
            "(defclass c () ((thing :type widget)))"
        )


@pytest.mark.parametrize(
    "option",
    [
        "(:type-inference :disabled)",
        "(:type-inference disabled)",
        "(:type-inference 'disabled)",
        "(:type-inference nil)",
    ],
)
def test_disabled_selector_turns_facet_off(option):
    assert expand(f"(defclass* c () ((x 0)) {option})") == read("(defclass c () ((x 0)))")


@pytest.mark.parametrize("option", ["(:initform-inference 'disabled)", "(:initform-inference disabled)"])
def test_disabled_initform_inference_leaves_typed_slot_alone(option):
    assert expand(f"(defclass* box () ((x :type widget)) {option})") == read(
        "(defclass box () ((x :type widget)))"
    )


def test_unknown_selector_is_rejected():
    with pytest.raises(SlotformNameError):
        expand("(defclass* c () ((x 0)) (:type-inference :psychic))")


def test_malformed_arguments():
    with pytest.raises(SlotformArityError):
        expand_defclass_star([Symbol("c"), []])
    with pytest.raises(SlotformTypeError):
        expand_defclass_star([1, [], []])
    with pytest.raises(SlotformArityError):
        split_options([[Symbol(":type-inference")]])


def test_nil_bases_and_slots():
    assert expand("(defclass* empty nil nil)") == [Symbol("defclass"), Symbol("empty"), [], []]


def test_policy_resolution():
    assert isinstance(resolve_initform_policy(Symbol(":error")), BuildErrorPolicy)
    assert isinstance(resolve_type_policy(Symbol("general")), GeneralTypeInference)
    assert resolve_initform_policy(Nil) is None
    assert resolve_type_policy(None) is None
    policy = NilFallbackPolicy()
    assert resolve_initform_policy(policy) is policy
    with pytest.raises(SlotformTypeError):
        resolve_initform_policy(42)


def test_explicit_config_object():
    config = InferenceConfig(initform_inference=NilFallbackPolicy(), type_inference=Nil)
    assert expand("(defclass* c () ((x 0) (thing :type widget)))", config) == read(
        "(defclass c () ((x 0) (thing :type widget)))"
    )


# --- through the interpreter -------------------------------------------------


def test_scenario_count_gets_integer_type(interp):
    cls = interp.eval("(defclass* counter () ((count 0)))")
    assert cls.slot(Symbol("count")).type_expr == Symbol("integer-or-number")
    assert interp.eval("(counter-count (make-counter))") == 0


def test_scenario_label_gets_empty_string(interp):
    interp.eval("(defclass* tag () ((label :type string)))")
    assert interp.eval("(tag-label (make-tag))") == ""


def test_scenario_untyped_handler_stays_unbound(interp):
    interp.eval("(defclass* hook () ((handler)) (:initform-inference :nil-fallback))")
    interp.eval("(define h (make-hook))")
    assert interp.eval("(slot-boundp h 'handler)") == Symbol("#f")


def test_scenario_unknown_type_halts_class_definition(interp):
    with pytest.raises(SlotInferenceError):
        interp.eval("(defclass* holder () ((thing :type widget)))")
    with pytest.raises(SlotformUnboundSymbol):
        interp.eval("holder")


def test_deferred_error_fails_only_when_slot_not_supplied(deferred_interp):
    deferred_interp.eval("(defclass* holder () ((thing :type widget) (count 0)))")
    deferred_interp.eval("(define h (make-holder :thing 'gadget))")
    assert deferred_interp.eval("(holder-thing h)") == Symbol("gadget")
    with pytest.raises(UnboundSlotError, match="thing"):
        deferred_interp.eval("(make-holder)")


def test_macroexpand_shows_transformed_slots(interp):
    assert interp.eval("(macroexpand-1 '(defclass* p () ((x 1.5))))") == read(
        "(defclass p () ((x 1.5 :type float)))"
    )


def test_global_default_binding_changes_later_expansions(interp):
    interp.eval("(set *default-initform-inference* :nil-fallback)")
    interp.eval("(defclass* holder () ((thing :type widget)))")
    assert interp.eval("(slot-boundp (make-holder) 'thing)") == Symbol("#f")


def test_constants_inform_type_inference(interp):
    interp.eval("(define +origin+ 0.0)")
    cls = interp.eval("(defclass* pt () ((x +origin+)))")
    assert cls.slot(Symbol("x")).type_expr == Symbol("float")
    assert interp.eval("(pt-x (make-pt))") == 0.0


def test_inherited_slots_with_inferred_defaults(interp):
    interp.eval("(defclass* base () ((name :type string)))")
    interp.eval("(defclass* child (base) ((tags :type list)))")
    interp.eval("(define c (make-child))")
    assert interp.eval("(base-name c)") == ""
    assert interp.eval("(child-tags c)") == []


def test_define_class_from_python(interp):
    cls = define_class(
        Symbol("box"),
        [],
        [[Symbol("w"), 1.0], [Symbol("label"), Symbol(":type"), Symbol("string")]],
        env=interp.env,
        macros=interp.macros,
    )
    assert cls.slot(Symbol("w")).type_expr == Symbol("float")
    assert interp.eval("(box-label (make-box))") == ""


def test_unsupplied_slot_trap_repr():
    assert repr(UnsuppliedSlot(Symbol("x"), Symbol("widget"))) == "#<unsupplied-slot x>"


def test_global_default_can_be_disabled(interp):
    interp.eval("(set *default-initform-inference* 'disabled)")
    cls = interp.eval("(defclass* box () ((x :type widget)))")
    assert not cls.slot(Symbol("x")).has_default


def test_defclass_star_inside_funcalled_lambda(interp):
    cls = interp.eval("(funcall (lambda () (defclass* box () ((x 0)))))")
    assert cls.slot(Symbol("x")).type_expr == Symbol("integer-or-number")
    assert interp.eval("(funcall (lambda () (defclass* pad () ((w 2.5))) (pad-w (make-pad))))") == 2.5


def test_numeric_looking_names_are_slot_names(interp):
    interp.eval("(define nan \"not a number\")")
    cls = interp.eval("(defclass* box () ((inf 0) (label nan)))")
    assert cls.slot(Symbol("inf")).type_expr == Symbol("integer-or-number")
    assert cls.slot(Symbol("label")).type_expr == Symbol("string")
