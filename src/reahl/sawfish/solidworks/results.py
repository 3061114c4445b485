import enum
import math

from reahl.sawfish.solidworks.com import interface_name_of
from reahl.sawfish.solidworks.com import is_live_object_handle


MAXIMUM_ARRAY_ELEMENTS = 10
MAXIMUM_ARRAY_DEPTH = 8
OPAQUE_HANDLE_NOTE = (
    'Live SolidWorks object; use sw_get_active_document, '
    'sw_get_feature_tree or other inspection tools to examine it.'
)
UNPRINTABLE_VALUE = '<unprintable>'


class ResultKind(enum.Enum):
    NULL = 'null'
    PRIMITIVE = 'primitive'
    NON_FINITE_NUMBER = 'non_finite_number'
    OPAQUE_HANDLE = 'opaque_handle'
    ARRAY = 'array'
    OTHER = 'other'

    @classmethod
    def of(cls, value):
        if value is None:
            return cls.NULL
        if isinstance(value, float) and not math.isfinite(value):
            return cls.NON_FINITE_NUMBER
        if isinstance(value, (bool, int, float, str)):
            return cls.PRIMITIVE
        try:
            if is_live_object_handle(value):
                return cls.OPAQUE_HANDLE
        except Exception:
            return cls.OTHER
        if isinstance(value, (list, tuple)):
            return cls.ARRAY
        return cls.OTHER


def safe_type_name(value):
    try:
        return interface_name_of(value)
    except Exception:
        return type(value).__name__


def best_effort_text(value):
    for render in (str, repr):
        try:
            return render(value)
        except Exception:
            continue
    return UNPRINTABLE_VALUE


def serialize(value, depth=0):
    """Shapes any value returned by SolidWorks into plain JSON data.

    Never raises. Live COM objects are described by interface name only
    and are never traversed.
    """
    result_kind = ResultKind.of(value)
    if result_kind is ResultKind.NULL:
        return None
    if result_kind is ResultKind.PRIMITIVE:
        return value
    if result_kind is ResultKind.NON_FINITE_NUMBER:
        return {'kind': 'float', 'value': str(value)}
    if result_kind is ResultKind.OPAQUE_HANDLE:
        return {'kind': safe_type_name(value), 'note': OPAQUE_HANDLE_NOTE}
    if result_kind is ResultKind.ARRAY:
        try:
            return serialize_array(value, depth)
        except Exception:
            # a misbehaving sequence falls back to its textual form
            pass
    return {'kind': safe_type_name(value), 'value': best_effort_text(value)}


def serialize_array(value, depth):
    serialized_array = {
        'kind': 'array',
        'length': len(value),
    }
    if depth >= MAXIMUM_ARRAY_DEPTH:
        serialized_array['note'] = 'nested too deeply'
        return serialized_array
    serialized_array['values'] = [
        serialize(element, depth + 1)
        for element in value[:MAXIMUM_ARRAY_ELEMENTS]
    ]
    return serialized_array
