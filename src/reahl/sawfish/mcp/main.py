import argparse
import logging
import os
import sys

from reahl.sawfish.documentation import API_DOCS_PATH_ENVIRONMENT_NAME
from reahl.sawfish.documentation import DocumentationIndex
from reahl.sawfish.documentation import documentation_path_from_environment
from reahl.sawfish.mcp.server import create_server
from reahl.sawfish.solidworks import DomainException
from reahl.sawfish.solidworks import SolidWorksSession


LOG_LEVEL_ENVIRONMENT_NAME = 'SAWFISH_LOG_LEVEL'
CONNECT_ON_START_ENVIRONMENT_NAME = 'SAWFISH_CONNECT_ON_START'
LOG_LEVEL_CHOICES = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def environment_value(environment_name, default=None):
    value = os.environ.get(environment_name, '').strip()
    return value or default


def environment_flag(environment_name, default):
    value = environment_value(environment_name)
    if value is None:
        return default
    return value.lower() not in ('0', 'false', 'no', 'off')


def configure_logging(log_level):
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def argument_parser():
    parser = argparse.ArgumentParser(
        description='Run SawfishMCP server.'
    )
    parser.add_argument(
        '--transport',
        default='stdio',
        choices=['stdio'],
        help='MCP transport type.',
    )
    parser.add_argument(
        '--api-docs-path',
        default=documentation_path_from_environment(),
        help=(
            'Directory holding the SolidWorks API help as HTML files '
            '(default: $%s).' % API_DOCS_PATH_ENVIRONMENT_NAME
        ),
    )
    parser.add_argument(
        '--log-level',
        default=environment_value(LOG_LEVEL_ENVIRONMENT_NAME, 'WARNING').upper(),
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        help='Logging level for stderr (default: $%s or WARNING).'
        % LOG_LEVEL_ENVIRONMENT_NAME,
    )
    parser.add_argument(
        '--no-connect-on-start',
        dest='connect_on_start',
        action='store_false',
        default=environment_flag(CONNECT_ON_START_ENVIRONMENT_NAME, True),
        help='Do not connect to SolidWorks until sw_connect is called.',
    )
    return parser


def connect_if_possible(solidworks_session):
    try:
        revision = solidworks_session.connect()
    except DomainException as error:
        logging.getLogger(__name__).warning(
            'Could not connect to SolidWorks on startup: %s',
            error,
        )
        return False
    logging.getLogger(__name__).info('Connected to SolidWorks %s', revision)
    return True


def run_application(command_line_arguments=None):
    parser = argument_parser()
    arguments = parser.parse_args(command_line_arguments)
    if arguments.log_level not in LOG_LEVEL_CHOICES:
        parser.error('Unknown log level: %s' % arguments.log_level)
    configure_logging(arguments.log_level)
    solidworks_session = SolidWorksSession()
    documentation_index = DocumentationIndex(arguments.api_docs_path)
    try:
        if arguments.connect_on_start:
            connect_if_possible(solidworks_session)
        mcp_server = create_server(
            solidworks_session=solidworks_session,
            documentation_index=documentation_index,
        )
        mcp_server.run(transport=arguments.transport)
    finally:
        solidworks_session.close()


if __name__ == '__main__':
    run_application()
