import inspect
import logging
import math

from reahl.sawfish.solidworks.coercion import coerce
from reahl.sawfish.solidworks.coercion import target_type_for_parameter
from reahl.sawfish.solidworks.com import DISPATCH_METHOD
from reahl.sawfish.solidworks.com import DISPATCH_PROPERTYGET
from reahl.sawfish.solidworks.com import DISPATCH_PROPERTYPUT
from reahl.sawfish.solidworks.com import interface_name_of
from reahl.sawfish.solidworks.com import late_bound_invoke
from reahl.sawfish.solidworks.com import matching_name
from reahl.sawfish.solidworks.com import required_argument_marker_for
from reahl.sawfish.solidworks.session import DomainException


class MissingParameter(DomainException):
    def __init__(self, parameter_name, member_name):
        super().__init__('Missing required parameter: %s' % parameter_name)
        self.parameter_name = parameter_name
        self.member_name = member_name


class InvocationFailure(DomainException):
    def __init__(self, message, diagnostic_detail=''):
        super().__init__(message)
        self.diagnostic_detail = diagnostic_detail


def error_description(error):
    return '%s: %s' % (type(error).__name__, error)


class Attempted:
    is_attempted = True

    def __init__(self, value):
        self.value = value


class Skipped:
    is_attempted = False

    def __init__(self, reason, error=None):
        self.reason = reason
        self.error = error

    def describe(self):
        if self.error is None:
            return self.reason
        return '%s (%s)' % (self.reason, error_description(self.error))


POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class MethodCandidate:
    def __init__(self, name, function, signature):
        self.name = name
        self.function = function
        self.required_marker = required_argument_marker_for(function)
        self.formal_parameters = [
            parameter
            for parameter in signature.parameters.values()
            if parameter.kind
            not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        self.accepts_extra_positionals = any(
            parameter.kind == inspect.Parameter.VAR_POSITIONAL
            for parameter in signature.parameters.values()
        )

    def is_required(self, parameter):
        return (
            parameter.default is inspect.Parameter.empty
            or (
                self.required_marker is not None
                and parameter.default is self.required_marker
            )
        )

    @property
    def required_count(self):
        return len(
            [
                parameter
                for parameter in self.formal_parameters
                if self.is_required(parameter)
            ]
        )

    @property
    def total_count(self):
        if self.accepts_extra_positionals:
            return math.inf
        return len(self.formal_parameters)

    def accepts_argument_count(self, argument_count):
        return self.required_count <= argument_count <= self.total_count

    def supplied_name_for(self, parameter, arguments):
        if parameter.name in arguments:
            return parameter.name
        return matching_name(arguments.keys(), parameter.name)

    def call_arguments(self, arguments):
        positional_arguments = []
        keyword_arguments = {}
        used_names = set()
        for parameter in self.formal_parameters:
            supplied_name = self.supplied_name_for(parameter, arguments)
            if supplied_name is not None:
                used_names.add(supplied_name)
                value = coerce(
                    arguments[supplied_name],
                    target_type_for_parameter(parameter, self.required_marker),
                    parameter.name,
                )
            elif not self.is_required(parameter):
                if parameter.kind not in POSITIONAL_KINDS:
                    continue
                value = parameter.default
            else:
                raise MissingParameter(parameter.name, self.name)
            if parameter.kind in POSITIONAL_KINDS:
                positional_arguments.append(value)
            else:
                keyword_arguments[parameter.name] = value
        if self.accepts_extra_positionals:
            positional_arguments.extend(
                value
                for name, value in arguments.items()
                if name not in used_names
            )
        return positional_arguments, keyword_arguments


def signature_of(function):
    try:
        return inspect.signature(function)
    except (TypeError, ValueError):
        return None


def public_method_candidates(target, member_name):
    target_class = type(target)
    lowercase_member_name = member_name.lower()
    candidates = []
    for name in dir(target_class):
        if name.startswith('_') or name.lower() != lowercase_member_name:
            continue
        if isinstance(inspect.getattr_static(target_class, name), property):
            continue
        function = getattr(target, name)
        if not callable(function):
            continue
        signature = signature_of(function)
        if signature is None:
            continue
        candidates.append(MethodCandidate(name, function, signature))
    return candidates


class IntrospectiveMethodMatch:
    name = 'introspective method match'

    def attempt(self, target, member_name, arguments):
        candidates = public_method_candidates(target, member_name)
        if not candidates:
            return Skipped('no public method named %s' % member_name)
        argument_count = len(arguments)
        for candidate in candidates:
            if candidate.accepts_argument_count(argument_count):
                return self.invoke_candidate(target, candidate, arguments)
        return Skipped(
            'no method named %s accepts %s argument(s)'
            % (member_name, argument_count)
        )

    def invoke_candidate(self, target, candidate, arguments):
        positional_arguments, keyword_arguments = candidate.call_arguments(
            arguments
        )
        try:
            return Attempted(
                candidate.function(*positional_arguments, **keyword_arguments)
            )
        except Exception as error:
            raise InvocationFailure(
                "Method '%s' failed on interface %s."
                % (candidate.name, interface_name_of(target)),
                diagnostic_detail=error_description(error),
            ) from error


class GenericMemberInvocation:
    name = 'generic member invocation'

    def attempt(self, target, member_name, arguments):
        try:
            return Attempted(
                late_bound_invoke(
                    target,
                    member_name,
                    DISPATCH_METHOD,
                    list(arguments.values()),
                )
            )
        except Exception as error:
            return Skipped('late-bound call failed', error)


class PropertyGetterFallback:
    name = 'property getter fallback'

    def attempt(self, target, member_name, arguments):
        if arguments:
            return Skipped('only tried without arguments')
        try:
            return Attempted(
                late_bound_invoke(target, member_name, DISPATCH_PROPERTYGET)
            )
        except Exception as error:
            return Skipped('late-bound property read failed', error)


def diagnostic_detail_for(skipped_tiers):
    return '; '.join(
        '%s: %s' % (tier.name, skipped.describe())
        for tier, skipped in skipped_tiers
    )


class MethodInvoker:
    """Calls a member by name on a live object, trying each tier in turn.

    The first tier that commits (returns a value, or raises a domain
    error after choosing a method) decides the outcome. Tier 1 commits to
    the first method whose parameter-count range fits the supplied
    arguments; overloads with compatible counts are not told apart.
    """

    def __init__(self, tiers=None):
        self.tiers = tiers or [
            IntrospectiveMethodMatch(),
            GenericMemberInvocation(),
            PropertyGetterFallback(),
        ]

    def invoke(self, target, member_name, arguments=None):
        arguments = arguments or {}
        skipped_tiers = []
        for tier in self.tiers:
            attempt = tier.attempt(target, member_name, arguments)
            if attempt.is_attempted:
                return attempt.value
            logging.getLogger(__name__).debug(
                'Skipped %s for %s: %s',
                tier.name,
                member_name,
                attempt.describe(),
            )
            skipped_tiers.append((tier, attempt))
        raise InvocationFailure(
            (
                "Method '%s' could not be invoked on interface %s. "
                'This may be a COM interop issue or the method does not exist. '
                'Attempted with %s parameter(s).'
            )
            % (member_name, interface_name_of(target), len(arguments)),
            diagnostic_detail=diagnostic_detail_for(skipped_tiers),
        )


def property_names_of(target_class):
    return [
        name
        for name in dir(target_class)
        if not name.startswith('_')
        and isinstance(inspect.getattr_static(target_class, name), property)
    ]


def generated_property_names_of(target_class, table_name):
    property_table = getattr(target_class, table_name, None)
    if not isinstance(property_table, dict):
        return []
    return list(property_table.keys())


class StructuralPropertyAccess:
    name = 'structural property access'

    def get(self, target, property_name):
        target_class = type(target)
        attribute_name = matching_name(
            property_names_of(target_class)
            + generated_property_names_of(target_class, '_prop_map_get_'),
            property_name,
        )
        if attribute_name is None:
            return Skipped('no readable property named %s' % property_name)
        try:
            return Attempted(getattr(target, attribute_name))
        except Exception as error:
            raise InvocationFailure(
                "Failed to get property '%s' on interface %s."
                % (property_name, interface_name_of(target)),
                diagnostic_detail=error_description(error),
            ) from error

    def set(self, target, property_name, value):
        target_class = type(target)
        writable_property_names = [
            name
            for name in property_names_of(target_class)
            if inspect.getattr_static(target_class, name).fset is not None
        ]
        attribute_name = matching_name(
            writable_property_names
            + generated_property_names_of(target_class, '_prop_map_put_'),
            property_name,
        )
        if attribute_name is None:
            return Skipped('no writable property named %s' % property_name)
        try:
            setattr(target, attribute_name, value)
        except Exception as error:
            raise InvocationFailure(
                "Failed to set property '%s' on interface %s."
                % (property_name, interface_name_of(target)),
                diagnostic_detail=error_description(error),
            ) from error
        return Attempted(value)


class GenericPropertyAccess:
    name = 'generic property access'

    def get(self, target, property_name):
        try:
            return Attempted(
                late_bound_invoke(target, property_name, DISPATCH_PROPERTYGET)
            )
        except Exception as error:
            return Skipped('late-bound property read failed', error)

    def set(self, target, property_name, value):
        try:
            late_bound_invoke(
                target,
                property_name,
                DISPATCH_PROPERTYPUT,
                [value],
            )
        except Exception as error:
            return Skipped('late-bound property write failed', error)
        return Attempted(value)


class PropertyAccessor:
    def __init__(self, tiers=None):
        self.tiers = tiers or [
            StructuralPropertyAccess(),
            GenericPropertyAccess(),
        ]

    def get_property(self, target, property_name):
        return self.first_attempted_value(
            lambda tier: tier.get(target, property_name),
            "Failed to get property '%s' on interface %s."
            % (property_name, interface_name_of(target)),
        )

    def set_property(self, target, property_name, value):
        return self.first_attempted_value(
            lambda tier: tier.set(target, property_name, value),
            "Failed to set property '%s' on interface %s."
            % (property_name, interface_name_of(target)),
        )

    def first_attempted_value(self, attempt_with_tier, failure_message):
        skipped_tiers = []
        for tier in self.tiers:
            attempt = attempt_with_tier(tier)
            if attempt.is_attempted:
                return attempt.value
            skipped_tiers.append((tier, attempt))
        raise InvocationFailure(
            failure_message,
            diagnostic_detail=diagnostic_detail_for(skipped_tiers),
        )
