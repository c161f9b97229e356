#!

"""NTCIP 1203 message dialogs.

Standardized dialogs for controlling the DMS that are more complex
than simple GETs or SETs: defining (downloading and validating) a
message, activating it, and retrieving (uploading) it.  Each is a
state machine whose states are the steps of the dialog.  Every dialog
works on one entry of the message table, given by memory type
("x" in the standard's notation) and message number ("y").
"""

from .common import *
from .values import *
from .statemachine import StateMachine, label
from . import transport
from . import activate
from . import poll
from . import mib
from . import logging

class MessageRecord (object):
    """The attributes of a message table entry, as retrieved.
    Beacon and pixel service stay 0 if the sign doesn't support them.
    """
    __slots__ = ("memory_type", "number", "multi_string", "owner",
                 "run_time_priority", "status", "beacon", "pixel_service")

    def __init__ (self, memory_type, number, multi_string = "", owner = "",
                  run_time_priority = 0, status = None, beacon = 0,
                  pixel_service = 0):
        self.memory_type = memory_type
        self.number = number
        self.multi_string = multi_string
        self.owner = owner
        self.run_time_priority = run_time_priority
        self.status = status
        self.beacon = beacon
        self.pixel_service = pixel_service

    def __eq__ (self, other):
        if not isinstance (other, MessageRecord):
            return NotImplemented
        return all (getattr (self, a) == getattr (other, a)
                    for a in self.__slots__)

    __hash__ = None

    def __str__ (self):
        return "{}({})".format (self.__class__.__name__,
                                ", ".join ("{}={!r}".format (a, getattr (self, a))
                                           for a in self.__slots__))

    __repr__ = __str__

class Dialog (StateMachine):
    """Base class for the dialogs.  "sign" supplies the transport, the
    parameter catalogue and the dialog configuration.

    Any exception that ends the dialog is tagged with the label of the
    state it happened in, so the message says which step failed.
    """
    def __init__ (self, sign, memory_type, number):
        super ().__init__ ()
        self.sign = sign
        self.transport = sign.transport
        self.catalogue = sign.catalogue
        self.config = sign.config
        self.memory_type = int (memory_type)
        self.number = int (number)

    @property
    def name (self):
        return "{}({}.{})".format (self.__class__.__name__,
                                   self.memory_type, self.number)

    def param (self, pname):
        "Identifier of a message table column for this entry"
        return self.catalogue[pname].identifier (self.memory_type,
                                                 self.number)

    def writeparam (self, pname, value):
        "Write request for a message table column for this entry"
        return self.catalogue[pname].write (value, self.memory_type,
                                            self.number)

    def run (self):
        logging.debug ("Starting {}", self.name)
        try:
            ret = super ().run ()
        except NtcipException as e:
            if e.step is None:
                e.step = self.statelabel ()
            logging.debug ("{} failed: {}", self.name, e)
            raise
        logging.debug ("{} done", self.name)
        return ret

    @label ("connect")
    def s0 (self):
        transport.connect (self.transport)
        return self.start

    @property
    def start (self):
        "The first state after connecting"
        raise NotImplementedError

class DefiningMessage (Dialog):
    """Download a message into a changeable or volatile message table
    entry and have the sign validate it.

    The caller must make sure the sign supports the message type and
    number and the MULTI tags used, and that there is space for the
    message.  The result is the final message status (valid).
    """
    def __init__ (self, sign, memory_type, number, multi_string, owner,
                  priority, beacon = 0, pixel_service = 0):
        super ().__init__ (sign, memory_type, number)
        self.multi_string = multi_string
        self.owner = owner
        self.priority = priority
        self.beacon = beacon
        self.pixel_service = pixel_service
        self.statusname = self.param ("dmsMessageStatus")

    @property
    def start (self):
        return self.modify_req

    def setstatus (self, status):
        logging.debug ("{} setting status {}", self.name, status)
        self.setparams (self.writeparam ("dmsMessageStatus", status))

    def setparams (self, *requests):
        status = transport.write (self.transport, requests)
        if status != NO_ERROR:
            raise ErrorResponse ("{}", status, status = status)

    @label ("set message status")
    def modify_req (self):
        self.setstatus (mib.MODIFY_REQ)
        return self.check_modifying

    @label ("get message status")
    def check_modifying (self):
        v = transport.read_one (self.transport, self.statusname)
        status = mib.MessageStatus (as_int (v, "dmsMessageStatus"))
        if status != mib.MODIFYING:
            # The way out is to set the status to notUsedReq and start
            # over; that is left to the caller.
            raise StatusMismatch ("message status parameter returns wrong "
                                  "value: {:d}. expect: {:d}",
                                  status, mib.MODIFYING, status = status)
        return self.write_content

    @label ("set MULTI string")
    def write_content (self):
        self.setparams (self.writeparam ("dmsMessageMultiString",
                                         self.multi_string),
                        self.writeparam ("dmsMessageOwner", self.owner),
                        self.writeparam ("dmsMessageRunTimePriority",
                                         self.priority))
        return self.write_beacon

    # Beacon and pixel service are optional; a sign without them
    # answers noSuchName, and then the message CRC is computed with
    # the value 0.  That answer currently ends the dialog.
    @label ("set beacon")
    def write_beacon (self):
        self.setparams (self.writeparam ("dmsMessageBeacon", self.beacon))
        return self.write_pixel_service

    @label ("set pixel service")
    def write_pixel_service (self):
        self.setparams (self.writeparam ("dmsMessagePixelService",
                                         self.pixel_service))
        return self.validate_req

    @label ("set message status")
    def validate_req (self):
        self.setstatus (mib.VALIDATE_REQ)
        return self.validating

    @label ("get message status")
    def validating (self):
        try:
            v = poll.poll (self.transport, self.statusname,
                           lambda v: as_int (v, "dmsMessageStatus") == mib.VALID,
                           self.config.validate_attempts,
                           self.config.validate_interval)
        except PollTimeout as e:
            self.laststatus = mib.MessageStatus (as_int (e.value))
            return self.diagnose
        self.result = mib.MessageStatus (as_int (v))
        logging.debug ("{} message is valid", self.name)
        return None

    @label ("validate message")
    def diagnose (self):
        # This is where dmsValidateMessageError.0 would be read, and
        # for syntaxMULTI dmsMultiSyntaxError.0 and
        # dmsMultiSyntaxErrorPosition.0, or for other
        # dmsMultiOtherErrorDescription.0.
        raise ValidateFailed ("message status is {} after {} attempts, "
                              "validate error diagnosis not performed",
                              self.laststatus,
                              self.config.validate_attempts,
                              status = self.laststatus)

class ActivatingMessage (Dialog):
    """Display a message that is stored in the sign, then check that
    the sign reports no errors preventing its display.  The result is
    the ActivateCode that was sent.
    """
    def __init__ (self, sign, memory_type, number, duration, priority):
        super ().__init__ (sign, memory_type, number)
        self.duration = duration
        self.priority = priority

    @property
    def start (self):
        return self.read_content

    @label ("get message")
    def read_content (self):
        names = { self.param (n) : n for n in
                  ("dmsMessageMultiString", "dmsMessageBeacon",
                   "dmsMessagePixelService") }
        results = transport.read (self.transport, names)
        content = { n : results[oid] for oid, n in names.items () }
        self.multi_string = as_bytes (content["dmsMessageMultiString"],
                                      "dmsMessageMultiString")
        self.beacon = self.flag (content, "dmsMessageBeacon")
        self.pixel_service = self.flag (content, "dmsMessagePixelService")
        return self.encode

    def flag (self, content, pname):
        # A sign without beacons or pixel service answers with an
        # exception value; the CRC then uses 0.
        v = content[pname]
        if isinstance (v, Null):
            logging.debug ("{} {} not supported: {}", self.name, pname, v)
            return 0
        return as_int (v, pname)

    @label ("encode activate message")
    def encode (self):
        self.code = activate.encode_activate_code (
            self.multi_string, self.beacon, self.pixel_service,
            self.memory_type, self.duration, self.priority, self.number,
            self.config.requester)
        return self.send_code

    @label ("set activate message")
    def send_code (self):
        req = self.catalogue["dmsActivateMessage"].write (self.code)
        self.status = transport.write (self.transport, [ req ])
        if self.status == NO_ERROR:
            return self.check_errors
        return self.diagnose

    @label ("activate message")
    def check_errors (self):
        # The message is active; make sure nothing (for example a
        # criticalTemperature alarm) prevents it from being displayed.
        p = self.catalogue["shortErrorStatus"]
        v = transport.read_one (self.transport, p.identifier ())
        if not isinstance (v, Null):
            errors = p.format (v)
            if errors:
                raise ActivationBlocked ("{}", ", ".join (errors),
                                         errors = errors)
        self.result = activate.decode_activate_code (self.code)
        logging.debug ("{} activated", self.name)
        return None

    @label ("activate message")
    def diagnose (self):
        # This is where dmsActivateMsgError.0 and
        # dmsActivateErrorMsgCode.0 would be read, and for syntaxMULTI
        # dmsMultiSyntaxError.0 and dmsMultiSyntaxErrorPosition.0
        # (and for MULTI error "other", dmsMultiOtherErrorDescription.0).
        raise ActivateFailed ("sign answered {}, activate error diagnosis "
                              "not performed", self.status,
                              status = self.status)

class RetrievingMessage (Dialog):
    """Upload a message table entry from the sign.  The result is a
    MessageRecord.
    """
    @property
    def start (self):
        return self.read_message

    @label ("get message")
    def read_message (self):
        names = { self.param (n) : n for n in
                  ("dmsMessageMultiString", "dmsMessageOwner",
                   "dmsMessageRunTimePriority", "dmsMessageStatus") }
        results = transport.read (self.transport, names)
        content = { n : results[oid] for oid, n in names.items () }
        self.result = MessageRecord (
            self.memory_type, self.number,
            multi_string = as_text (content["dmsMessageMultiString"],
                                    "dmsMessageMultiString"),
            owner = as_text (content["dmsMessageOwner"], "dmsMessageOwner"),
            run_time_priority = as_int (content["dmsMessageRunTimePriority"],
                                        "dmsMessageRunTimePriority"),
            status = mib.MessageStatus (as_int (content["dmsMessageStatus"],
                                                "dmsMessageStatus")))
        return self.read_beacon

    def optional (self, pname):
        # Beacon and pixel service may be unsupported; the sign then
        # answers noSuchName or an exception value.  Either way the
        # value stays at its default of 0.
        try:
            v = transport.read_one (self.transport, self.param (pname))
            return as_int (v, pname)
        except NtcipException as e:
            logging.debug ("{} {} not available: {}", self.name, pname, e)
            return 0

    @label ("get beacon")
    def read_beacon (self):
        self.result.beacon = self.optional ("dmsMessageBeacon")
        return self.read_pixel_service

    @label ("get pixel service")
    def read_pixel_service (self):
        self.result.pixel_service = self.optional ("dmsMessagePixelService")
        return None
