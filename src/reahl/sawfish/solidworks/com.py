import sys


DISPATCH_METHOD = 1
DISPATCH_PROPERTYGET = 2
DISPATCH_PROPERTYPUT = 4
LOCALE_USER_DEFAULT = 0

RAW_COM_INTERFACE_TYPE_NAMES = frozenset({'PyIDispatch', 'PyIUnknown'})
REQUIRED_ARGUMENT_MARKER_NAME = 'defaultNamedNotOptArg'


def instance_attributes_of(value):
    try:
        return vars(value)
    except TypeError:
        return {}


def ole_object_of(value):
    ole_object = instance_attributes_of(value).get('_oleobj_')
    if ole_object is not None:
        return ole_object
    if type(value).__name__ == 'PyIDispatch':
        return value
    return None


def is_live_object_handle(value):
    return (
        '_oleobj_' in instance_attributes_of(value)
        or type(value).__name__ in RAW_COM_INTERFACE_TYPE_NAMES
    )


def interface_name_of(value):
    user_name = instance_attributes_of(value).get('_username_')
    if isinstance(user_name, str) and user_name:
        return user_name
    return type(value).__name__


def required_argument_marker_for(function):
    # makepy wrappers default required arguments to this module-level marker
    module_name = getattr(function, '__module__', None)
    if not module_name:
        return None
    module = sys.modules.get(module_name)
    return getattr(module, REQUIRED_ARGUMENT_MARKER_NAME, None)


def matching_name(names, wanted_name):
    lowercase_wanted_name = wanted_name.lower()
    for name in names:
        if name.lower() == lowercase_wanted_name:
            return name
    return None


def late_bound_invoke(target, member_name, invoke_kind, arguments=()):
    ole_object = ole_object_of(target)
    if ole_object is not None:
        return invoke_through_dispatch(
            ole_object,
            member_name,
            invoke_kind,
            arguments,
        )
    return invoke_python_attribute(target, member_name, invoke_kind, arguments)


def invoke_through_dispatch(ole_object, member_name, invoke_kind, arguments):
    dispatch_id = ole_object.GetIDsOfNames(member_name)
    result_wanted = invoke_kind != DISPATCH_PROPERTYPUT
    return ole_object.Invoke(
        dispatch_id,
        LOCALE_USER_DEFAULT,
        invoke_kind,
        result_wanted,
        *arguments
    )


def invoke_python_attribute(target, member_name, invoke_kind, arguments):
    attribute_name = matching_name(dir(target), member_name)
    if attribute_name is None or attribute_name.startswith('_'):
        raise AttributeError(
            "%s has no member named '%s'"
            % (interface_name_of(target), member_name)
        )
    if invoke_kind == DISPATCH_METHOD:
        return getattr(target, attribute_name)(*arguments)
    if invoke_kind == DISPATCH_PROPERTYGET:
        value = getattr(target, attribute_name)
        if callable(value):
            raise TypeError(
                "'%s' is a method of %s, not a property"
                % (attribute_name, interface_name_of(target))
            )
        return value
    (value,) = arguments
    setattr(target, attribute_name, value)
    return None
