#!

"""Logging extensions for the NTCIP DMS dialogs.

"""

import logging
import logging.config
import logging.handlers
import os
import sys
import json
import functools

try:
    from yaml import load, Loader
except ImportError:
    load = None

# Additional level
TRACE = 2

# Inherit some names from the standard logging module
CRITICAL = logging.CRITICAL
ERROR = logging.ERROR
WARNING = logging.WARNING
INFO = logging.INFO
DEBUG = logging.DEBUG

# Some more names which will be replaced later, but are used when the
# log machinery isn't actually started -- in the test suite, or when
# the dialogs are used as a library.
critical = logging.critical
error = logging.error
warning = logging.warning
info = logging.info
debug = logging.debug
exception = logging.exception
trace = functools.partial (logging.log, TRACE)
log = logging.log
tracing = False

stdlog =  {
    "version": 1,
    "formatters": {
        "ntformatter": {
            "()": "ntcip.logging.NtFormatter",
            "format": "{asctime}: {levelname}: {message}",
            "style": "{"
            }
        },
    "handlers": {
        "nthandler": {
            "class": "logging.StreamHandler",
            "formatter": "ntformatter"
            }
        },
    "root": {
        "handlers": [ "nthandler" ],
        "level": "INFO"
        },
    "loggers" : {
        "ntcip": {
            "propagate" : True
            }
        }
    }

class NtFormatter (logging.Formatter):
    default_msec_format = "%s.%03d"

# Message strings are formatted with "format", not "%".  The "style"
# argument of Formatter only covers the record layout, so getMessage
# of the LogRecord class is overridden to do the message part.
class NtcipLogRecord (logging.LogRecord):
    def getMessage (self):
        msg = str (self.msg)
        if self.args:
            msg = msg.format (*self.args)
        return msg

logging.setLogRecordFactory (NtcipLogRecord)

logging.addLevelName (TRACE, "TRACE")

def start (p):
    """Start logging using the program arguments in "p": log_config,
    log_file, keep and log_level.
    """
    global logconfig
    if p.log_config:
        fn = p.log_config
        with open (fn, "rt") as f:
            lc = f.read ()
        if fn.endswith (".yaml"):
            if not load:
                print ("YAML config file but no YAML support",
                       file = sys.stderr)
                sys.exit (1)
            logconfig = load (lc, Loader = Loader)
        else:
            logconfig = json.loads (lc)
        if "loggers" not in logconfig:
            logconfig["loggers"] = dict (stdlog["loggers"])
        if "ntcip" not in logconfig["loggers"]:
            logconfig["loggers"]["ntcip"] = stdlog["loggers"]["ntcip"]
    else:
        logconfig = json.loads (json.dumps (stdlog))
        h = logconfig["handlers"]["nthandler"]
        if p.log_file:
            h["filename"] = os.path.abspath (p.log_file)
            if p.keep:
                h["class"] = "logging.handlers.TimedRotatingFileHandler"
                h["when"] = "midnight"
                h["backupCount"] = p.keep
            else:
                h["class"] = "logging.FileHandler"
                h["mode"] = "a"
        elif p.keep:
            print ("--keep requires --log-file", file = sys.stderr)
            sys.exit (1)
        logconfig["root"]["level"] = p.log_level
    logging.config.dictConfig (logconfig)
    setntciplogger ()

def setntciplogger ():
    # Everything we log goes to child logger "ntcip".  By default that
    # simply delegates to the root logger, but a custom log config can
    # set up something special for it.
    global ntcipLogger, tracing
    global critical, error, warning, info, debug, trace, exception
    ntcipLogger = logging.getLogger ("ntcip")
    # Trace calls on the per-request path are made conditional on this
    tracing = ntcipLogger.isEnabledFor (TRACE)
    critical = ntcipLogger.critical
    error = ntcipLogger.error
    warning = ntcipLogger.warning
    info = ntcipLogger.info
    debug = ntcipLogger.debug
    exception = ntcipLogger.exception
    # TRACE as a call to "log" with the level filled in, so the caller
    # info in the record is the place where "trace" was called.
    trace = functools.partial (ntcipLogger.log, TRACE)

def stop ():
    trace ("Logging stopped")
    logging.shutdown ()
