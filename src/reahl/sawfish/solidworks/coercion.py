import enum
import inspect
import typing

from reahl.sawfish.solidworks.session import DomainException


class JsonKind(enum.Enum):
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    TEXT = 'text'
    SEQUENCE = 'sequence'
    MAPPING = 'mapping'

    @classmethod
    def of(cls, value):
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.TEXT
        if isinstance(value, (list, tuple)):
            return cls.SEQUENCE
        if isinstance(value, dict):
            return cls.MAPPING
        return None


class CoercionError(DomainException):
    def __init__(self, parameter_name, json_kind, target_type_name):
        kind_name = json_kind.value if json_kind else 'an unsupported value'
        super().__init__(
            "Parameter '%s' expects %s but was given %s."
            % (parameter_name, target_type_name, kind_name)
        )
        self.parameter_name = parameter_name
        self.json_kind = json_kind
        self.target_type_name = target_type_name


NUMERIC_TYPES = (int, float)
JSON_KIND_BY_PASS_THROUGH_TYPE = {
    bool: JsonKind.BOOLEAN,
    str: JsonKind.TEXT,
}
SEQUENCE_TYPES = (list, tuple)


def type_name_of(target_type):
    return getattr(target_type, '__name__', None) or str(target_type)


def container_type_of(target_type):
    return typing.get_origin(target_type) or target_type


def target_type_for_parameter(parameter, required_marker=None):
    if parameter.annotation is not inspect.Parameter.empty:
        return parameter.annotation
    default = parameter.default
    if default is inspect.Parameter.empty or default is None:
        return None
    if required_marker is not None and default is required_marker:
        return None
    return type(default)


def coerce(value, target_type, parameter_name):
    json_kind = JsonKind.of(value)
    if json_kind in (None, JsonKind.NULL) or target_type is None:
        return value
    container_type = container_type_of(target_type)
    if not isinstance(container_type, type):
        return value
    if container_type in NUMERIC_TYPES:
        return coerced_number(value, json_kind, container_type, parameter_name)
    if container_type in JSON_KIND_BY_PASS_THROUGH_TYPE:
        if JSON_KIND_BY_PASS_THROUGH_TYPE[container_type] is not json_kind:
            raise CoercionError(
                parameter_name,
                json_kind,
                type_name_of(container_type),
            )
        return value
    if container_type in SEQUENCE_TYPES:
        return coerced_sequence(value, json_kind, target_type, parameter_name)
    return value


def coerced_number(value, json_kind, numeric_type, parameter_name):
    if json_kind is not JsonKind.NUMBER:
        raise CoercionError(parameter_name, json_kind, numeric_type.__name__)
    if numeric_type is float:
        try:
            return float(value)
        except OverflowError as error:
            raise CoercionError(
                parameter_name,
                json_kind,
                numeric_type.__name__,
            ) from error
    if isinstance(value, float):
        if not value.is_integer():
            raise CoercionError(parameter_name, json_kind, numeric_type.__name__)
        return int(value)
    return value


def element_type_at(element_types, index):
    if not element_types:
        return None
    if len(element_types) == 2 and element_types[1] is Ellipsis:
        return element_types[0]
    if len(element_types) == 1:
        return element_types[0]
    if index < len(element_types):
        return element_types[index]
    return None


def coerced_sequence(value, json_kind, target_type, parameter_name):
    container_type = container_type_of(target_type)
    if json_kind is not JsonKind.SEQUENCE:
        raise CoercionError(parameter_name, json_kind, container_type.__name__)
    element_types = typing.get_args(target_type)
    return container_type(
        coerce(
            element,
            element_type_at(element_types, index),
            '%s[%s]' % (parameter_name, index),
        )
        for index, element in enumerate(value)
    )
