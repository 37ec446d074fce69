'''Serialization of evaluator and voting system configuration.

Evaluators decorated with :func:`simple_serialization` get a ``to_dict()``
method producing a JSON-ready description of their setup, and
:func:`from_dict` rebuilds the object from such a description. This concerns
the configuration of the voting methods only, not election results.

Tie breakers and other plain functions are described by their qualified name
under the ``callable`` key.
'''

import inspect
import importlib
from typing import Any, Dict, Tuple

SCALAR_TYPES = (str, int, float, bool, type(None))


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The class must keep each of its constructor arguments in an attribute
    of the same name.

    :param class_: The class to add the method to.
    '''
    class_.serialized_params = constructor_params(class_)
    class_.to_dict = to_dict
    return class_


def constructor_params(class_: type) -> Tuple[str, ...]:
    if class_.__init__ is object.__init__:
        return ()
    return tuple(
        name
        for name, param in inspect.signature(class_.__init__).parameters.items()
        if name != 'self' and param.kind not in (
            inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD
        )
    )


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize an evaluator or voting system to a JSON-ready dictionary.

    :param obj: An object of a class decorated by
        :func:`simple_serialization`.
    """
    described = {'class': qualified_name(type(obj))}
    for name in obj.serialized_params:
        described[name] = serialize_value(getattr(obj, name))
    return described


def from_dict(value: Dict[str, Any]) -> Any:
    """Rebuild an evaluator or voting system from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe an object.
    """
    if not isinstance(value, dict) or 'class' not in value:
        raise ValueError(f'invalid votesim object def: {value!r}')
    return deserialize_value(value)


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'serialized_params') and not isinstance(value, type):
        return to_dict(value)
    elif isinstance(value, SCALAR_TYPES):
        return value
    elif isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    elif callable(value):
        return {'callable': qualified_name(value)}
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if 'class' in value:
            class_ = resolve(value['class'])
            return class_(**{
                key: deserialize_value(val)
                for key, val in value.items() if key != 'class'
            })
        elif 'callable' in value:
            return resolve(value['callable'])
    elif isinstance(value, SCALAR_TYPES):
        return value
    elif isinstance(value, list):
        return [deserialize_value(item) for item in value]
    raise ValueError(f'cannot deserialize {value!r}')


def qualified_name(obj: Any) -> str:
    return f'{obj.__module__}.{obj.__qualname__}'


def resolve(identifier: Any) -> Any:
    '''Find the module member named by a dotted identifier.'''
    if not (
        isinstance(identifier, str)
        and '.' in identifier
        and all(chunk.isidentifier() for chunk in identifier.split('.'))
    ):
        raise ValueError(f'invalid votesim object name: {identifier!r}')
    module, name = identifier.rsplit('.', 1)
    return getattr(importlib.import_module(module), name)
