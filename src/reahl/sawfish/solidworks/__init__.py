from reahl.sawfish.solidworks.coercion import CoercionError
from reahl.sawfish.solidworks.coercion import JsonKind
from reahl.sawfish.solidworks.coercion import coerce
from reahl.sawfish.solidworks.dispatch import InvalidArguments
from reahl.sawfish.solidworks.dispatch import InvocationOutcome
from reahl.sawfish.solidworks.dispatch import SolidWorksApiDispatcher
from reahl.sawfish.solidworks.inspection import InspectionFailure
from reahl.sawfish.solidworks.inspection import NoActiveDocument
from reahl.sawfish.solidworks.inspection import active_document_summary
from reahl.sawfish.solidworks.inspection import feature_tree
from reahl.sawfish.solidworks.invocation import InvocationFailure
from reahl.sawfish.solidworks.invocation import MethodInvoker
from reahl.sawfish.solidworks.invocation import MissingParameter
from reahl.sawfish.solidworks.invocation import PropertyAccessor
from reahl.sawfish.solidworks.objects import ObjectGraphResolver
from reahl.sawfish.solidworks.objects import ObjectResolutionFailure
from reahl.sawfish.solidworks.objects import known_object_names
from reahl.sawfish.solidworks.results import serialize
from reahl.sawfish.solidworks.session import ConnectionUnavailable
from reahl.sawfish.solidworks.session import DomainException
from reahl.sawfish.solidworks.session import NOT_CONNECTED_MESSAGE
from reahl.sawfish.solidworks.session import SolidWorksSession

__all__ = [
    'CoercionError',
    'ConnectionUnavailable',
    'DomainException',
    'InspectionFailure',
    'InvalidArguments',
    'InvocationFailure',
    'InvocationOutcome',
    'JsonKind',
    'MethodInvoker',
    'MissingParameter',
    'NOT_CONNECTED_MESSAGE',
    'NoActiveDocument',
    'ObjectGraphResolver',
    'ObjectResolutionFailure',
    'PropertyAccessor',
    'SolidWorksApiDispatcher',
    'SolidWorksSession',
    'active_document_summary',
    'coerce',
    'feature_tree',
    'known_object_names',
    'serialize',
]
