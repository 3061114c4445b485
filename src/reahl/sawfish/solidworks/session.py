import logging
import sys
import threading
from concurrent.futures import ThreadPoolExecutor


class DomainException(Exception):
    pass


class ConnectionUnavailable(DomainException):
    pass


SOLIDWORKS_PROG_ID = 'SldWorks.Application'
NOT_CONNECTED_MESSAGE = 'Not connected to SolidWorks'


def initialize_com_apartment():
    if sys.platform == 'win32':
        import pythoncom

        pythoncom.CoInitialize()


def dispatch_solidworks_application():
    if sys.platform != 'win32':
        raise ConnectionUnavailable(
            'SolidWorks automation is only available on Windows.'
        )
    import pywintypes
    import win32com.client

    try:
        return win32com.client.Dispatch(SOLIDWORKS_PROG_ID)
    except pywintypes.com_error as error:
        raise ConnectionUnavailable(
            'Failed to connect to SolidWorks. '
            'Please ensure SolidWorks is installed and running. (%s)' % error
        ) from error


class SolidWorksSession:
    """The one live connection to SolidWorks.

    Every call that touches the SolidWorks object graph goes through
    perform(), which runs it on a single dedicated worker thread. Calls
    therefore queue up and never interleave, and all COM objects stay in
    the apartment of that thread. There is no timeout: a call that hangs
    inside SolidWorks blocks every later perform().
    """

    def __init__(
        self,
        application_factory=None,
        thread_initializer=initialize_com_apartment,
    ):
        self.application_factory = (
            application_factory or dispatch_solidworks_application
        )
        self.thread_initializer = thread_initializer
        self.application = None
        self.worker_thread = None
        self.executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix='sawfish-solidworks',
            initializer=self.initialize_worker_thread,
        )

    def initialize_worker_thread(self):
        self.worker_thread = threading.current_thread()
        if self.thread_initializer:
            self.thread_initializer()

    def is_performing_thread(self):
        return threading.current_thread() is self.worker_thread

    def perform(self, action):
        if self.is_performing_thread():
            return action()
        return self.executor.submit(action).result()

    def is_live(self):
        return self.application is not None

    def root(self):
        return self.application

    def active_document(self):
        if self.application is None:
            return None
        return self.application.ActiveDoc

    def require_application(self):
        if self.application is None:
            raise ConnectionUnavailable(NOT_CONNECTED_MESSAGE)
        return self.application

    def connect(self):
        return self.perform(self.connect_application)

    def connect_application(self):
        logging.getLogger(__name__).debug(
            'Connecting to %s',
            SOLIDWORKS_PROG_ID,
        )
        application = self.application_factory()
        if application is None:
            raise ConnectionUnavailable(
                'Could not connect to SolidWorks. '
                'Please ensure SolidWorks is running.'
            )
        try:
            application.Visible = True
            revision = application.RevisionNumber()
        except Exception as error:
            raise ConnectionUnavailable(
                'SolidWorks did not respond after connecting: %s' % error
            ) from error
        self.application = application
        logging.getLogger(__name__).debug(
            'Connected to SolidWorks %s',
            revision,
        )
        return revision

    def disconnect(self):
        self.perform(self.release_application)

    def release_application(self):
        if self.application is not None:
            logging.getLogger(__name__).debug('Releasing SolidWorks application')
        self.application = None

    def close(self):
        self.disconnect()
        self.executor.shutdown(wait=True)
