import inspect

from reahl.sawfish import __version__


class McpDependencyNotInstalled(Exception):
    pass


def import_fast_mcp():
    try:
        from mcp.server.fastmcp import FastMCP
    except ModuleNotFoundError as module_not_found_error:
        raise McpDependencyNotInstalled(
            'SawfishMCP requires the mcp package. '
            'Install with: pip install reahl-sawfish'
        ) from module_not_found_error
    return FastMCP


def create_server(solidworks_session=None, documentation_index=None):
    fast_mcp = import_fast_mcp()
    register_tools = import_tool_registration()
    try:
        constructor_signature = inspect.signature(fast_mcp)
    except (TypeError, ValueError):
        constructor_signature = None
    supports_keyword_arguments = any(
        parameter.kind == inspect.Parameter.VAR_KEYWORD
        for parameter in (
            constructor_signature.parameters.values()
            if constructor_signature
            else []
        )
    )
    server_arguments = {'name': 'SawfishMCP'}
    if (
        supports_keyword_arguments
        or (
            constructor_signature
            and 'version' in constructor_signature.parameters
        )
    ):
        server_arguments['version'] = __version__
    mcp_server = fast_mcp(**server_arguments)
    register_tools(
        mcp_server,
        solidworks_session=solidworks_session,
        documentation_index=documentation_index,
    )
    return mcp_server


def import_tool_registration():
    from reahl.sawfish.mcp.tools import register_tools

    return register_tools
