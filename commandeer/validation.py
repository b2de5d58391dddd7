"""
Arity and position rules for parameter lists.

Two entry points, one per phase
- validate_order(specs): declaration time. A required parameter may not follow
  an optional one and a variadic parameter must be the last one.
- validate(values, specs): parse time. The supplied positional values must
  fill every required slot and must not overflow the declared slots unless the
  last slot is variadic.

Both are stateless and purely positional; option state is never consulted.
"""
from .faults import *
from .utils import *


def validate_order(specs, /, *, source=Unset):
    """
    check the declaration-time ordering invariants of a parameter list.

    parameters
    - specs: sequence of ParameterSpec, in declaration order.
    - source: optional pattern or path used in the fault message.

    raises
    - InvalidParameterOrderError
    """
    where = "" if source is Unset else " in %r" % source
    optional = None
    for index, spec in enumerate(specs):
        if spec.kind.required and optional is not None:
            raise InvalidParameterOrderError(
                "required parameter %r cannot follow optional parameter %r%s" % (spec.name, optional.name, where),
                title="invalid parameter order",
                code=FaultCode.INVALID_PARAMETER_ORDER,
                hint="declare required parameters before optional ones",
                pattern=source,
                parameter=spec,
            )
        if spec.kind.variadic and index != len(specs) - 1:
            raise InvalidParameterOrderError(
                "variadic parameter %r must be the last parameter%s" % (spec.name, where),
                title="invalid parameter order",
                code=FaultCode.INVALID_PARAMETER_ORDER,
                hint="move %r to the end of the parameter list" % str(spec),
                pattern=source,
                parameter=spec,
            )
        if not spec.kind.required:
            optional = spec


def arity(specs, /):
    """
    return (required, maximum) slot counts for a parameter list; maximum is None when unbounded.
    """
    required = sum(1 for spec in specs if spec.kind.required)
    maximum = None if specs and specs[-1].kind.variadic else len(specs)
    return required, maximum


def validate(values, specs, /, *, command=None):
    """
    check supplied positional values against a parameter list.

    rules
    - fewer values than required slots → TooFewParametersError.
    - more values than declared slots, when the last slot is not variadic →
      TooManyParametersError. excess values otherwise collapse into the variadic.

    parameters
    - values: sequence of str (the positional values after the command path).
    - specs: sequence of ParameterSpec.
    - command: optional CommandSpec, attached to the fault for targeted help.
    """
    required, maximum = arity(specs)
    supplied = len(values)
    route = " ".join(command.path) if command is not None else "this command"

    if supplied < required:
        raise TooFewParametersError(
            "%s expects at least %d %s but %d %s given" % (
                route,
                required,
                "parameter" if required == 1 else pluralize("parameter"),
                supplied,
                "was" if supplied == 1 else "were",
            ),
            title="too few parameters",
            code=FaultCode.TOO_FEW_PARAMETERS,
            hint="add the missing %s: %s" % (
                pluralize("value") if required - supplied > 1 else "value",
                " ".join(str(spec) for spec in specs[supplied:required]),
            ),
            command=command,
            parameters=tuple(values),
            expected=required,
        )

    if maximum is not None and supplied > maximum:
        raise TooManyParametersError(
            "%s expects at most %d %s but %d were given" % (
                route,
                maximum,
                "parameter" if maximum == 1 else pluralize("parameter"),
                supplied,
            ),
            title="too many parameters",
            code=FaultCode.TOO_MANY_PARAMETERS,
            hint="remove the extra %s: %s" % (
                "value" if supplied - maximum == 1 else pluralize("value"),
                " ".join(values[maximum:]),
            ),
            command=command,
            parameters=tuple(values),
            token=values[maximum],
            expected=maximum,
        )


__all__ = (
    "validate_order",
    "validate",
    "arity",
)
