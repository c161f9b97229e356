#!

"""Command line entry point for the NTCIP DMS dialogs.

"""

import sys
import argparse

from .common import *
from . import config
from . import logging
from . import activate
from . import transport
from .sign import Sign

def intarg (lo, hi):
    "Argument type for an integer in the range lo..hi"
    def check (s):
        v = int (s, 0)
        if not lo <= v <= hi:
            raise argparse.ArgumentTypeError ("{} not in range {}..{}"
                                              .format (s, lo, hi))
        return v
    return check

cmdparser = argparse.ArgumentParser (prog = "ntcip-dms")
cmdparser.add_argument ("-c", "--config", type = argparse.FileType ("r"),
                        metavar = "CFN", help = "Configuration file "
                        "(default: %s if a sign is used)" % DEFCONFIG)
cmdparser.add_argument ("-s", "--sign", type = config.signname,
                        metavar = "NAME",
                        help = "Sign to talk to (default: the only one configured)")
cmdparser.add_argument ("-L", "--log-file", metavar = "FN",
                        help = "Log file (default: log to stderr)")
cmdparser.add_argument ("--log-config", metavar = "LC",
                        help = "Logging configuration file (JSON or YAML)")
cmdparser.add_argument ("-e", "--log-level", default = "WARNING",
                        metavar = "LV",
                        choices = ("TRACE", "DEBUG", "INFO",
                                   "WARNING", "ERROR"),
                        help = "Log level (default: WARNING)")
cmdparser.add_argument ("-k", "--keep", type = int, default = 0,
                        help = """Number of log files to keep with nightly
rotation.  Requires a log file name to be specified.""")
cmdparser.add_argument ("-V", "--version", action = "version",
                        version = NTVERSION)
cmdparser.add_argument ("-H", "--config-help", metavar = "CMD",
                        nargs = "?", const = "",
                        help = "Show configuration file help (for CMD if given)")
cmds = cmdparser.add_subparsers (dest = "command", metavar = "COMMAND")

cp = cmds.add_parser ("encode", help = "Print an activation code")
cp.add_argument ("multi", metavar = "MULTI", help = "MULTI string")
cp.add_argument ("--beacon", type = intarg (0, 255), default = 0)
cp.add_argument ("--pixel-service", type = intarg (0, 255), default = 0)
cp.add_argument ("--memory-type", type = intarg (0, 255), required = True)
cp.add_argument ("--number", type = intarg (0, 65535), required = True)
cp.add_argument ("--duration", type = intarg (0, 65535), default = 65535,
                 help = "Minutes, 65535 for indefinite (default)")
cp.add_argument ("--priority", type = intarg (0, 255), default = 255)
cp.add_argument ("--requester", type = config.ipaddr, default = REQUESTER)

cp = cmds.add_parser ("define", help = "Download and validate a message")
cp.add_argument ("memory_type", type = intarg (0, 255), metavar = "MT")
cp.add_argument ("number", type = intarg (0, 65535), metavar = "NUM")
cp.add_argument ("multi", metavar = "MULTI", help = "MULTI string")
cp.add_argument ("--owner", default = REQUESTER)
cp.add_argument ("--priority", type = intarg (0, 255), default = 255,
                 help = "Run time priority (default 255)")
cp.add_argument ("--beacon", type = intarg (0, 255), default = 0)
cp.add_argument ("--pixel-service", type = intarg (0, 255), default = 0)

cp = cmds.add_parser ("activate", help = "Activate a message")
cp.add_argument ("memory_type", type = intarg (0, 255), metavar = "MT")
cp.add_argument ("number", type = intarg (0, 65535), metavar = "NUM")
cp.add_argument ("--duration", type = intarg (0, 65535), default = 65535,
                 help = "Minutes, 65535 for indefinite (default)")
cp.add_argument ("--priority", type = intarg (0, 255), default = 255)

cp = cmds.add_parser ("retrieve", help = "Upload a message")
cp.add_argument ("memory_type", type = intarg (0, 255), metavar = "MT")
cp.add_argument ("number", type = intarg (0, 65535), metavar = "NUM")

def open_sign (p):
    """Read the configuration and make the Sign for the one selected.
    """
    c = config.Config (p.config)
    if p.sign:
        try:
            sc = c.sign[p.sign]
        except KeyError:
            raise ValueError ("Sign {} not configured".format (p.sign)) from None
    elif len (c.sign) == 1:
        sc, = c.sign.values ()
    else:
        raise ValueError ("Specify a sign with --sign, there are {} configured"
                          .format (len (c.sign)))
    if not sc.host:
        sc.host = sc.name
    factory = transport.load_factory (sc.transport)
    return Sign (factory (sc), dconfig = c.dialog, name = sc.name)

def run (p):
    if p.command == "encode":
        code = activate.encode_activate_code (p.multi, p.beacon,
                                              p.pixel_service, p.memory_type,
                                              p.duration, p.priority,
                                              p.number, p.requester)
        print (code.hex ().upper ())
        return
    sign = open_sign (p)
    if p.command == "define":
        status = sign.define (p.memory_type, p.number, p.multi, p.owner,
                              p.priority, p.beacon, p.pixel_service)
        logging.info ("{} message {}.{} is {}", sign, p.memory_type,
                      p.number, status)
        print (status)
    elif p.command == "activate":
        code = sign.activate (p.memory_type, p.number, p.duration, p.priority)
        logging.info ("{} activated {}", sign, code)
        print (bytes (code).hex ().upper ())
    else:
        r = sign.retrieve (p.memory_type, p.number)
        for a in r.__slots__:
            print ("{}: {}".format (a, getattr (r, a)))

def main (args = None):
    """Main program.  Parses command arguments, sets up logging, and
    runs the requested command.  Returns the exit status.
    """
    p = cmdparser.parse_args (args)
    if p.config_help is not None:
        if p.config_help:
            args = p.config_help, "-h"
        else:
            args = ( "-h", )
        p, msg = config.configparser.parse_args (args)
        print (msg)
        return 0
    if not p.command:
        cmdparser.print_usage ()
        return 1
    logging.start (p)
    try:
        run (p)
    except NtcipException as e:
        logging.error ("{}", e)
        return 1
    except (ValueError, ImportError, OSError) as e:
        logging.error ("{}", e)
        return 1
    finally:
        logging.stop ()
    return 0

if __name__ == "__main__":
    sys.exit (main ())
