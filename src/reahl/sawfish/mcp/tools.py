import logging

from reahl.sawfish.documentation import DocumentationIndex
from reahl.sawfish.documentation import available_workflow_types
from reahl.sawfish.documentation import common_interfaces
from reahl.sawfish.documentation import documentation_path_from_environment
from reahl.sawfish.documentation import workflow_guidance
from reahl.sawfish.solidworks import DomainException
from reahl.sawfish.solidworks import SolidWorksApiDispatcher
from reahl.sawfish.solidworks import SolidWorksSession
from reahl.sawfish.solidworks import active_document_summary
from reahl.sawfish.solidworks import feature_tree


def register_tools(
    mcp_server,
    solidworks_session=None,
    documentation_index=None,
):
    if solidworks_session is None:
        solidworks_session = SolidWorksSession()
    if documentation_index is None:
        documentation_index = DocumentationIndex(
            documentation_path_from_environment()
        )
    dispatcher = SolidWorksApiDispatcher(
        solidworks_session,
        documentation_index=documentation_index,
    )

    def failure_response(error):
        response = {
            'success': False,
            'error': str(error),
        }
        diagnostic_detail = getattr(error, 'diagnostic_detail', None)
        if diagnostic_detail:
            response['diagnostic'] = diagnostic_detail
        return response

    def validated_non_empty_string(input_value, argument_name):
        if not isinstance(input_value, str):
            raise DomainException('%s must be a string.' % argument_name)
        if not input_value.strip():
            raise DomainException('%s cannot be empty.' % argument_name)
        return input_value.strip()

    def validated_optional_string(input_value, argument_name):
        if input_value is None:
            return None
        if not isinstance(input_value, str):
            raise DomainException('%s must be a string.' % argument_name)
        return input_value

    def validated_positive_integer(input_value, argument_name):
        if isinstance(input_value, bool) or not isinstance(input_value, int):
            raise DomainException('%s must be an integer.' % argument_name)
        if input_value <= 0:
            raise DomainException('%s must be greater than zero.' % argument_name)
        return input_value

    def validated_boolean(input_value, argument_name):
        if not isinstance(input_value, bool):
            raise DomainException('%s must be a boolean.' % argument_name)
        return input_value

    def inspection_response(inspect_session, response_for):
        try:
            inspection_result = solidworks_session.perform(
                lambda: inspect_session(solidworks_session)
            )
        except DomainException as error:
            logging.getLogger(__name__).warning('Inspection failed: %s', error)
            return failure_response(error)
        response = {'success': True}
        response.update(response_for(inspection_result))
        return response

    @mcp_server.tool()
    def sw_connect():
        """Connect to the running SolidWorks application, starting it if needed."""
        try:
            revision = solidworks_session.connect()
        except DomainException as error:
            logging.getLogger(__name__).warning(
                'Connecting to SolidWorks failed: %s',
                error,
            )
            return failure_response(error)
        return {
            'success': True,
            'connected': True,
            'revision': revision,
        }

    @mcp_server.tool()
    def sw_connection_status():
        return {
            'success': True,
            'connected': solidworks_session.is_live(),
        }

    @mcp_server.tool()
    def sw_execute_api(
        interface_name,
        method_name,
        parameters_json=None,
        include_documentation=True,
    ):
        """Call any SolidWorks API method by name.

        interface_name names a reachable object such as ISldWorks,
        IModelDoc2, ISketchManager or IFeatureManager. parameters_json is
        a JSON object mapping parameter names to values.
        """
        try:
            interface_name = validated_non_empty_string(
                interface_name,
                'interface_name',
            )
            method_name = validated_non_empty_string(method_name, 'method_name')
            parameters_json = validated_optional_string(
                parameters_json,
                'parameters_json',
            )
            include_documentation = validated_boolean(
                include_documentation,
                'include_documentation',
            )
        except DomainException as error:
            return failure_response(error)
        return dispatcher.invoke_member(
            interface_name,
            method_name,
            parameters_json=parameters_json,
            include_documentation=include_documentation,
        ).as_response()

    @mcp_server.tool()
    def sw_access_property(
        interface_name,
        property_name,
        value_json=None,
        include_documentation=True,
    ):
        """Get a property of a SolidWorks object, or set it when value_json is given."""
        try:
            interface_name = validated_non_empty_string(
                interface_name,
                'interface_name',
            )
            property_name = validated_non_empty_string(
                property_name,
                'property_name',
            )
            value_json = validated_optional_string(value_json, 'value_json')
            include_documentation = validated_boolean(
                include_documentation,
                'include_documentation',
            )
        except DomainException as error:
            return failure_response(error)
        return dispatcher.access_property(
            interface_name,
            property_name,
            value_json=value_json,
            include_documentation=include_documentation,
        ).as_response()

    @mcp_server.tool()
    def sw_search_api(query, max_results=10):
        """Search the SolidWorks API help for interfaces, methods and concepts."""
        try:
            query = validated_non_empty_string(query, 'query')
            max_results = validated_positive_integer(max_results, 'max_results')
        except DomainException as error:
            return failure_response(error)
        doc_records = documentation_index.search(query, max_results)
        if not doc_records:
            return {
                'success': True,
                'query': query,
                'resultCount': 0,
                'message': (
                    'No documentation found for the query. '
                    'Try different keywords or check the spelling.'
                ),
            }
        return {
            'success': True,
            'query': query,
            'resultCount': len(doc_records),
            'results': [
                doc_record.as_search_result() for doc_record in doc_records
            ],
        }

    @mcp_server.tool()
    def sw_get_interface_documentation(interface_name):
        try:
            interface_name = validated_non_empty_string(
                interface_name,
                'interface_name',
            )
        except DomainException as error:
            return failure_response(error)
        doc_record = documentation_index.lookup(interface_name)
        if doc_record is None:
            return {
                'success': False,
                'error': 'No documentation found for interface: %s'
                % interface_name,
            }
        return {
            'success': True,
            'interfaceName': doc_record.interface_name,
            'description': doc_record.description,
            'syntax': doc_record.syntax,
            'remarks': doc_record.remarks,
            'filePath': doc_record.file_path,
        }

    @mcp_server.tool()
    def sw_get_method_documentation(interface_name, method_name):
        try:
            interface_name = validated_non_empty_string(
                interface_name,
                'interface_name',
            )
            method_name = validated_non_empty_string(method_name, 'method_name')
        except DomainException as error:
            return failure_response(error)
        doc_record = documentation_index.lookup(interface_name, method_name)
        if doc_record is None:
            return {
                'success': False,
                'error': 'No documentation found for method: %s.%s'
                % (interface_name, method_name),
            }
        return {
            'success': True,
            'interfaceName': doc_record.interface_name,
            'methodName': doc_record.member_name,
            'description': doc_record.description,
            'syntax': doc_record.syntax,
            'remarks': doc_record.remarks,
            'filePath': doc_record.file_path,
        }

    @mcp_server.tool()
    def sw_get_code_examples(query, max_results=5):
        """Find code examples in the SolidWorks API help, e.g. 'create extrusion'."""
        try:
            query = validated_non_empty_string(query, 'query')
            max_results = validated_positive_integer(max_results, 'max_results')
        except DomainException as error:
            return failure_response(error)
        code_examples = documentation_index.examples(query, max_results)
        if not code_examples:
            return {
                'success': True,
                'query': query,
                'exampleCount': 0,
                'message': (
                    'No code examples found for the query. '
                    'Try different keywords.'
                ),
            }
        return {
            'success': True,
            'query': query,
            'exampleCount': len(code_examples),
            'examples': [
                code_example.as_dict() for code_example in code_examples
            ],
        }

    @mcp_server.tool()
    def sw_list_common_interfaces():
        interfaces = common_interfaces()
        return {
            'success': True,
            'interfaceCount': len(interfaces),
            'interfaces': interfaces,
            'note': (
                'Use sw_search_api or sw_get_interface_documentation to get '
                'detailed information about any interface.'
            ),
        }

    @mcp_server.tool()
    def sw_get_workflow_guidance(workflow_type):
        """Step-by-step guidance for part, assembly, sketch, feature, selection or drawing work."""
        try:
            workflow_type = validated_non_empty_string(
                workflow_type,
                'workflow_type',
            )
        except DomainException as error:
            return failure_response(error)
        guidance = workflow_guidance(workflow_type)
        if guidance is None:
            return {
                'success': False,
                'error': 'Unknown workflow type: %s' % workflow_type,
                'availableTypes': available_workflow_types(),
            }
        return {
            'success': True,
            'workflowType': workflow_type,
            'guidance': guidance,
        }

    @mcp_server.tool()
    def sw_get_active_document():
        return inspection_response(
            active_document_summary,
            lambda document: {'document': document},
        )

    @mcp_server.tool()
    def sw_get_feature_tree():
        return inspection_response(feature_tree, lambda tree: tree)
