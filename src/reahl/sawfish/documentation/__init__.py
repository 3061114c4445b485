from reahl.sawfish.documentation.guidance import available_workflow_types
from reahl.sawfish.documentation.guidance import common_interfaces
from reahl.sawfish.documentation.guidance import workflow_guidance
from reahl.sawfish.documentation.index import API_DOCS_PATH_ENVIRONMENT_NAME
from reahl.sawfish.documentation.index import CodeExample
from reahl.sawfish.documentation.index import DocRecord
from reahl.sawfish.documentation.index import DocumentationIndex
from reahl.sawfish.documentation.index import documentation_path_from_environment

__all__ = [
    'API_DOCS_PATH_ENVIRONMENT_NAME',
    'CodeExample',
    'DocRecord',
    'DocumentationIndex',
    'available_workflow_types',
    'common_interfaces',
    'documentation_path_from_environment',
    'workflow_guidance',
]
