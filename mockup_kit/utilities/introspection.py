"""
Type introspection helpers.

Small wrappers around ``typing`` and ``inspect`` used to read declared
property types from target classes and to decide how a class is constructed.
"""

import dataclasses
import inspect
import logging
import sys
import types
import typing
from typing import Any, ClassVar, get_args, get_origin

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


def resolve_hints(obj: Any) -> dict[str, Any]:
    """
    Resolve type hints for a class or function, evaluating forward references.

    Names are looked up in the defining module and in the classes enclosing
    ``obj``. When evaluation fails as a whole, each annotation is evaluated
    on its own and only the failing ones are left as strings.
    """
    localns = _enclosing_namespace(obj)
    try:
        return typing.get_type_hints(obj, localns=localns or None)
    except Exception as e:
        logger.debug(f"Could not evaluate type hints of {qualified_name(obj)}: {e}")

    hints: dict[str, Any] = {}
    sources = reversed(obj.__mro__) if inspect.isclass(obj) else (obj,)
    for source in sources:
        if source is object:
            continue
        globalns = getattr(source, "__globals__", None) or _module_namespace(source)
        scope = {**localns, **_enclosing_namespace(source)}
        for name, annotation in _own_annotations(source).items():
            hints[name] = _evaluate(annotation, globalns, scope)
    return hints


def _module_namespace(obj: Any) -> dict[str, Any]:
    module = sys.modules.get(getattr(obj, "__module__", None) or "")
    return vars(module) if module is not None else {}


def _enclosing_namespace(obj: Any) -> dict[str, Any]:
    """Classes visible from the class bodies enclosing ``obj``, and nested in its bases."""
    namespace: dict[str, Any] = {}
    scope: Any = sys.modules.get(getattr(obj, "__module__", None) or "")
    for part in getattr(obj, "__qualname__", "").split(".")[:-1]:
        if part == "<locals>" or scope is None:
            break
        scope = getattr(scope, part, None)
        if inspect.isclass(scope):
            namespace.update({k: v for k, v in vars(scope).items() if inspect.isclass(v)})

    if inspect.isclass(obj):
        for klass in reversed(obj.__mro__):
            namespace.update({k: v for k, v in vars(klass).items() if inspect.isclass(v)})
    return namespace


def _own_annotations(obj: Any) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(obj))
    except Exception as e:
        logger.debug(f"Could not read annotations of {qualified_name(obj)}: {e}")
        return {}


def _evaluate(annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, dict(globalns), dict(localns))  # noqa: S307
    except Exception as e:
        logger.debug(f"Leaving annotation '{annotation}' unresolved: {e}")
        return annotation


def unwrap_annotation(annotation: Any, new_types: bool = True) -> Any:
    """
    Strip ``Annotated`` and ``Optional`` wrappers from an annotation.

    ``NewType`` aliases are replaced by their supertype unless ``new_types``
    is False. ``Any`` becomes ``object``.
    """
    while True:
        if annotation is typing.Any:
            return object
        if new_types and is_new_type(annotation):
            annotation = annotation.__supertype__
            continue
        origin = get_origin(annotation)
        if origin is typing.Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin is typing.Union or origin is types.UnionType:
            members = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
            if len(members) == 1:
                annotation = members[0]
                continue
        return annotation


def is_optional(annotation: Any) -> bool:
    """Check if an annotation admits None."""
    origin = get_origin(annotation)
    if origin is typing.Annotated:
        return is_optional(get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        return _NONE_TYPE in get_args(annotation)
    return annotation is _NONE_TYPE


def is_class_var(annotation: Any) -> bool:
    """Check if an annotation declares a class variable."""
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


def is_init_var(annotation: Any) -> bool:
    """Check if an annotation is a dataclass ``InitVar`` pseudo-field."""
    return isinstance(annotation, dataclasses.InitVar) or annotation is dataclasses.InitVar


def is_new_type(annotation: Any) -> bool:
    """Check if an annotation was created with ``typing.NewType``."""
    return callable(annotation) and hasattr(annotation, "__supertype__")


def is_frozen_dataclass(cls: type) -> bool:
    """Check if a class is a frozen dataclass."""
    params = getattr(cls, "__dataclass_params__", None)
    return dataclasses.is_dataclass(cls) and bool(params and params.frozen)


def requires_init_arguments(cls: type) -> bool:
    """
    Check if constructing ``cls`` needs arguments.

    Classes whose signature cannot be inspected are assumed to construct
    without arguments.
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False

    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.default is parameter.empty:
            return True
    return False


def qualified_name(annotation: Any) -> str:
    """Return a readable, module-qualified name for a type or annotation."""
    if isinstance(annotation, str):
        return annotation
    if inspect.isclass(annotation) or inspect.isfunction(annotation):
        module = getattr(annotation, "__module__", "")
        name = getattr(annotation, "__qualname__", annotation.__name__)
        return name if module in ("builtins", "") else f"{module}.{name}"
    if is_new_type(annotation):
        return annotation.__name__
    return repr(annotation)
