import json
import logging

from reahl.sawfish.solidworks.invocation import MethodInvoker
from reahl.sawfish.solidworks.invocation import PropertyAccessor
from reahl.sawfish.solidworks.invocation import error_description
from reahl.sawfish.solidworks.objects import ObjectGraphResolver
from reahl.sawfish.solidworks.objects import ObjectResolutionFailure
from reahl.sawfish.solidworks.objects import canonical_object_name
from reahl.sawfish.solidworks.results import serialize
from reahl.sawfish.solidworks.session import DomainException
from reahl.sawfish.solidworks.session import NOT_CONNECTED_MESSAGE


class InvalidArguments(DomainException):
    pass


class NoValue:
    pass


NO_VALUE = NoValue()


NOT_A_JSON_OBJECT_MESSAGE = (
    'Invalid JSON parameters: expected a JSON object '
    'mapping parameter names to values.'
)


def parsed_arguments(parameters_json):
    if isinstance(parameters_json, dict):
        return dict(parameters_json)
    if parameters_json is None:
        return {}
    if not isinstance(parameters_json, str):
        raise InvalidArguments(NOT_A_JSON_OBJECT_MESSAGE)
    if not parameters_json.strip():
        return {}
    try:
        arguments = json.loads(parameters_json)
    except json.JSONDecodeError as error:
        raise InvalidArguments('Invalid JSON parameters: %s' % error) from error
    if not isinstance(arguments, dict):
        raise InvalidArguments(NOT_A_JSON_OBJECT_MESSAGE)
    return arguments


def parsed_property_value(value_json):
    if value_json is None:
        return NO_VALUE
    if not isinstance(value_json, str):
        return value_json
    if not value_json.strip():
        return NO_VALUE
    try:
        return json.loads(value_json)
    except json.JSONDecodeError:
        return value_json


class InvocationOutcome:
    def __init__(
        self,
        is_success,
        payload=None,
        message=None,
        diagnostic_detail=None,
        documentation=None,
    ):
        self.is_success = is_success
        self.payload = payload or {}
        self.message = message
        self.diagnostic_detail = diagnostic_detail
        self.documentation = documentation

    @classmethod
    def success(cls, payload, documentation=None):
        return cls(True, payload=payload, documentation=documentation)

    @classmethod
    def failure(cls, message, diagnostic_detail=None, documentation=None):
        return cls(
            False,
            message=message,
            diagnostic_detail=diagnostic_detail,
            documentation=documentation,
        )

    def as_response(self):
        if self.is_success:
            response = {'success': True}
            response.update(self.payload)
            response['documentation'] = self.documentation
            return response
        response = {
            'success': False,
            'error': self.message,
        }
        if self.diagnostic_detail:
            response['diagnostic'] = self.diagnostic_detail
        if self.documentation is not None:
            response['documentation'] = self.documentation
        return response


class SolidWorksApiDispatcher:
    """Runs symbolically named calls against the live SolidWorks objects.

    invoke_member() and access_property() never raise: every problem is
    returned as a failed InvocationOutcome.
    """

    def __init__(
        self,
        session,
        documentation_index=None,
        method_invoker=None,
        property_accessor=None,
    ):
        self.session = session
        self.documentation_index = documentation_index
        self.resolver = ObjectGraphResolver(session)
        self.method_invoker = method_invoker or MethodInvoker()
        self.property_accessor = property_accessor or PropertyAccessor()

    def invoke_member(
        self,
        object_name,
        member_name,
        parameters_json=None,
        include_documentation=True,
    ):
        if not self.session.is_live():
            return InvocationOutcome.failure(NOT_CONNECTED_MESSAGE)
        try:
            arguments = parsed_arguments(parameters_json)
        except InvalidArguments as error:
            return InvocationOutcome.failure(str(error))
        documentation = self.documentation_for(
            object_name,
            member_name,
            include_documentation,
        )
        logging.getLogger(__name__).debug(
            'Invoking %s.%s with %s argument(s)',
            object_name,
            member_name,
            len(arguments),
        )
        return self.outcome_of(
            lambda: {
                'interfaceName': object_name,
                'methodName': member_name,
                'result': self.invoke_on_live_object(
                    object_name,
                    member_name,
                    arguments,
                ),
            },
            '%s.%s' % (object_name, member_name),
            documentation,
        )

    def access_property(
        self,
        object_name,
        property_name,
        value_json=None,
        include_documentation=True,
    ):
        if not self.session.is_live():
            return InvocationOutcome.failure(NOT_CONNECTED_MESSAGE)
        value = parsed_property_value(value_json)
        documentation = self.documentation_for(
            object_name,
            property_name,
            include_documentation,
        )
        operation = 'get' if value is NO_VALUE else 'set'
        logging.getLogger(__name__).debug(
            'Property %s of %s.%s',
            operation,
            object_name,
            property_name,
        )
        return self.outcome_of(
            lambda: {
                'operation': operation,
                'interfaceName': object_name,
                'propertyName': property_name,
                'value': self.access_on_live_object(
                    object_name,
                    property_name,
                    value,
                ),
            },
            '%s.%s' % (object_name, property_name),
            documentation,
        )

    def outcome_of(self, live_action, description, documentation):
        try:
            payload = self.session.perform(live_action)
        except DomainException as error:
            logging.getLogger(__name__).warning(
                '%s failed: %s',
                description,
                error,
            )
            return InvocationOutcome.failure(
                str(error),
                diagnostic_detail=getattr(error, 'diagnostic_detail', None),
                documentation=documentation,
            )
        except Exception as error:
            logging.getLogger(__name__).exception('%s failed', description)
            return InvocationOutcome.failure(
                str(error) or error_description(error),
                diagnostic_detail=error_description(error),
                documentation=documentation,
            )
        return InvocationOutcome.success(payload, documentation=documentation)

    def resolved_object(self, object_name):
        self.session.require_application()
        target = self.resolver.resolve(object_name)
        if target is None:
            raise ObjectResolutionFailure(object_name)
        return target

    def invoke_on_live_object(self, object_name, member_name, arguments):
        target = self.resolved_object(object_name)
        return serialize(self.method_invoker.invoke(target, member_name, arguments))

    def access_on_live_object(self, object_name, property_name, value):
        target = self.resolved_object(object_name)
        if value is NO_VALUE:
            return serialize(
                self.property_accessor.get_property(target, property_name)
            )
        return serialize(
            self.property_accessor.set_property(target, property_name, value)
        )

    def documentation_for(self, object_name, member_name, include_documentation):
        if not include_documentation or self.documentation_index is None:
            return None
        doc_record = self.documentation_index.lookup(
            canonical_object_name(object_name),
            member_name,
        )
        if doc_record is None:
            return None
        return doc_record.as_documentation()
