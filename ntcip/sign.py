#!

"""A sign controller, as seen from the management station.

"""

from .common import *
from . import config
from . import dialogs
from . import mib

class Sign (object):
    """The collaborators of the dialogs for one sign: its transport,
    the parameter catalogue to use, and the "dialog" configuration
    entry (defaults are used if none is given).

    A Sign holds no dialog state, so dialogs on different message
    table entries may run on separate threads if the transport allows
    it.  Nothing coordinates dialogs on the same entry.
    """
    def __init__ (self, transport, catalogue = mib.dms, dconfig = None,
                  name = "DMS"):
        self.transport = transport
        self.catalogue = catalogue
        if dconfig is None:
            dconfig = config.defaults ("dialog")
        self.config = dconfig
        self.name = name

    def __str__ (self):
        return "Sign {}".format (self.name)

    def define (self, memory_type, number, multi_string, owner, priority,
                beacon = 0, pixel_service = 0):
        """Download and validate a message.  Returns the final
        message status.
        """
        return dialogs.DefiningMessage (self, memory_type, number,
                                        multi_string, owner, priority,
                                        beacon, pixel_service).run ()

    def activate (self, memory_type, number, duration, priority):
        """Activate a message.  Returns the ActivateCode that was sent.
        """
        return dialogs.ActivatingMessage (self, memory_type, number,
                                          duration, priority).run ()

    def retrieve (self, memory_type, number):
        """Upload a message.  Returns a MessageRecord.
        """
        return dialogs.RetrievingMessage (self, memory_type, number).run ()
