import io
import sys

# The display classes are where all of our output goes. Callers use
# get_handle() to get a handle for each job, like one writer run. The handle
# is used as a context manager to mark when the job starts and stops, and
# everything the job wants to report is passed to the handle's write() method.
# The display's print() method is for output that isn't tied to a job.
#
# The VerboseDisplay buffers each job's output and prints it all once the job
# is finished, in a form that's suitable for logs. The QuietDisplay drops job
# output and only shows print() calls.
#
# Errors aren't the display's business. They're raised as PrintableErrors and
# printed in main.


class BaseDisplay:
    def __init__(self, output=None):
        self.output = output or sys.stdout
        self._next_job_id = 0
        self.buffers = {}
        self.titles = {}
        # Handles that haven't finished yet.
        self.outstanding_jobs = set()

    def get_handle(self, title):
        job_id = self._next_job_id
        self._next_job_id += 1
        self.titles[job_id] = title
        self.buffers[job_id] = io.StringIO()
        self.outstanding_jobs.add(job_id)
        return _DisplayHandle(self, job_id)

    def print(self, *args, **kwargs):
        print(*args, file=self.output, **kwargs)

    # Callbacks that get overridden by subclasses.

    def _job_started(self, job_id):
        pass

    def _job_finished(self, job_id):
        pass

    # Callbacks for handles.

    def _handle_start(self, job_id):
        self._job_started(job_id)

    def _handle_write(self, job_id, string):
        self.buffers[job_id].write(string)

    def _handle_finish(self, job_id):
        self.outstanding_jobs.remove(job_id)
        self._job_finished(job_id)


class QuietDisplay(BaseDisplay):
    '''Prints nothing but print() output.'''
    pass


class VerboseDisplay(BaseDisplay):
    '''Prints each job's output as one block when the job finishes, between
    '===' delimiters.'''

    def _job_started(self, job_id):
        print('===', 'started', self.titles[job_id], '===', file=self.output)

    def _job_finished(self, job_id):
        print('===', 'finished', self.titles[job_id], '===', file=self.output)
        outputstr = self.buffers[job_id].getvalue()
        if outputstr:
            self.output.write(outputstr)
            print('===', file=self.output)


class _DisplayHandle:
    def __init__(self, display, job_id):
        self._display = display
        self._job_id = job_id
        self._opened = False
        self._closed = False

    def write(self, string):
        assert self._opened and not self._closed
        self._display._handle_write(self._job_id, string)

    # A handle is only written to inside its with statement, and only used
    # once.
    def __enter__(self):
        assert not self._opened and not self._closed
        self._opened = True
        self._display._handle_start(self._job_id)
        return self

    def __exit__(self, *args):
        assert self._opened and not self._closed
        self._display._handle_finish(self._job_id)
        self._job_id = None
        self._closed = True
