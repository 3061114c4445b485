from reahl.sawfish.solidworks.invocation import error_description
from reahl.sawfish.solidworks.results import serialize
from reahl.sawfish.solidworks.session import DomainException


SW_DOCUMENT_TYPE_NAMES = {
    0: 'None',
    1: 'Part',
    2: 'Assembly',
    3: 'Drawing',
    4: 'SDM',
    5: 'Layout',
    6: 'ImportedPart',
    7: 'ImportedAssembly',
}
MAXIMUM_FEATURES = 10000


class NoActiveDocument(DomainException):
    def __init__(self):
        super().__init__('No active document')


class InspectionFailure(DomainException):
    def __init__(self, message, diagnostic_detail=''):
        super().__init__(message)
        self.diagnostic_detail = diagnostic_detail


def required_active_document(session):
    session.require_application()
    try:
        document = session.active_document()
    except Exception as error:
        raise InspectionFailure(
            'Failed to read the active document.',
            diagnostic_detail=error_description(error),
        ) from error
    if document is None:
        raise NoActiveDocument()
    return document


def document_type_name(document_type):
    return SW_DOCUMENT_TYPE_NAMES.get(document_type, str(document_type))


def active_document_summary(session):
    document = required_active_document(session)
    try:
        return {
            'name': serialize(document.GetTitle()),
            'type': document_type_name(document.GetType()),
            'path': serialize(document.GetPathName()),
            'isModified': serialize(document.GetSaveFlag()),
            'isReadOnly': serialize(document.IsOpenedReadOnly()),
            'visible': serialize(document.Visible),
        }
    except Exception as error:
        raise InspectionFailure(
            'Failed to read the active document.',
            diagnostic_detail=error_description(error),
        ) from error


def feature_summary(feature):
    return {
        'name': serialize(feature.Name),
        'typeName': serialize(feature.GetTypeName()),
        'visible': serialize(feature.Visible),
        'suppressed': serialize(feature.IsSuppressed()),
    }


def feature_tree(session):
    document = required_active_document(session)
    try:
        features = []
        feature = document.FirstFeature()
        while feature is not None and len(features) < MAXIMUM_FEATURES:
            features.append(feature_summary(feature))
            feature = feature.GetNextFeature()
        return {
            'documentName': serialize(document.GetTitle()),
            'featureCount': len(features),
            'features': features,
        }
    except Exception as error:
        raise InspectionFailure(
            'Failed to read the feature tree.',
            diagnostic_detail=error_description(error),
        ) from error
