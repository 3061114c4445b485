from reahl.sawfish.solidworks.session import DomainException


SW_DOC_PART = 1
SW_DOC_ASSEMBLY = 2
SW_DOC_DRAWING = 3


class ObjectResolutionFailure(DomainException):
    def __init__(self, object_name, diagnostic_detail=''):
        super().__init__(
            'Could not get instance of interface: %s' % object_name
        )
        self.object_name = object_name
        self.diagnostic_detail = diagnostic_detail


def application_root(session):
    return session.root()


def active_document(session):
    return session.active_document()


def active_document_member(member_name):
    def access_member(session):
        document = session.active_document()
        if document is None:
            return None
        return getattr(document, member_name)

    return access_member


def active_document_of_type(document_type):
    def access_typed_document(session):
        document = session.active_document()
        if document is None:
            return None
        if document.GetType() != document_type:
            return None
        return document

    return access_typed_document


WELL_KNOWN_OBJECTS = (
    ('ISldWorks', application_root),
    ('IModelDoc2', active_document),
    ('IModelDocExtension', active_document_member('Extension')),
    ('ISketchManager', active_document_member('SketchManager')),
    ('IFeatureManager', active_document_member('FeatureManager')),
    ('ISelectionMgr', active_document_member('SelectionManager')),
    ('IPartDoc', active_document_of_type(SW_DOC_PART)),
    ('IAssemblyDoc', active_document_of_type(SW_DOC_ASSEMBLY)),
    ('IDrawingDoc', active_document_of_type(SW_DOC_DRAWING)),
)


def accessors_by_lowercase_name(well_known_objects):
    accessors = {}
    for interface_name, accessor in well_known_objects:
        accessors[interface_name.lower()] = accessor
        accessors[interface_name[1:].lower()] = accessor
    return accessors


def known_object_names():
    return [interface_name for interface_name, _ in WELL_KNOWN_OBJECTS]


def canonical_object_name(object_name):
    if not isinstance(object_name, str):
        return object_name
    lowercase_name = object_name.strip().lower()
    for interface_name in known_object_names():
        if lowercase_name in (interface_name.lower(), interface_name[1:].lower()):
            return interface_name
    return object_name


class ObjectGraphResolver:
    """Maps well-known interface names to live objects of the session.

    Nothing is cached: the active document can change between two
    requests, so every resolve() reads the live pointers again. It must
    be called from inside SolidWorksSession.perform().
    """

    def __init__(self, session, well_known_objects=WELL_KNOWN_OBJECTS):
        self.session = session
        self.accessors = accessors_by_lowercase_name(well_known_objects)

    def is_known_object_name(self, object_name):
        return self.accessor_for(object_name) is not None

    def accessor_for(self, object_name):
        if not isinstance(object_name, str):
            return None
        return self.accessors.get(object_name.strip().lower())

    def resolve(self, object_name):
        accessor = self.accessor_for(object_name)
        if accessor is None:
            return None
        try:
            return accessor(self.session)
        except Exception as error:
            raise ObjectResolutionFailure(object_name, str(error)) from error
