#!

"""NTCIP DMS config

"""

import os
import sys
import argparse
import shlex

from .common import *
from . import activate
from . import logging

class _ParseError (Exception): pass

class ntparser (argparse.ArgumentParser):
    """An ArgumentParser that hands errors and help text back to the
    caller instead of printing them and exiting.  parse_args returns a
    pair of the parsed arguments (None if there was an error) and the
    error or help message (None if there wasn't one).
    """
    def error (self, message):
        raise _ParseError ("{}: {}".format (self.prog or "config", message))

    def exit (self, status = 0, message = None):
        raise _ParseError (message or "")

    def print_help (self, file = None):
        raise _ParseError (self.format_help ())

    def parse_args (self, args = None, namespace = None):
        try:
            return super ().parse_args (args, namespace), None
        except _ParseError as e:
            return None, str (e)

def signname (s):
    s = s.upper ()
    if not s or not all (c.isalnum () or c in "-_" for c in s):
        raise argparse.ArgumentTypeError ("Invalid sign name {}".format (s))
    return s

def ipaddr (s):
    try:
        activate.Ipaddr (s)
    except InvalidAddress:
        raise argparse.ArgumentTypeError ("Invalid IPv4 address {}".format (s))
    return s

def seconds (s):
    v = float (s)
    if v < 0:
        raise argparse.ArgumentTypeError ("Negative interval {}".format (s))
    return v

configparser = ntparser (prog = "", add_help = False)
configparser.add_argument ("-h", action = "help", help = argparse.SUPPRESS)
subparser = configparser.add_subparsers ()
coll_init = set ()
single_init = set ()

def config_cmd (name, help, collection = False):
    cp = subparser.add_parser (name, add_help = False, help = help)
    cp.add_argument ("-h", action = "help", help = argparse.SUPPRESS)
    cp.set_defaults (collection = collection, attr = name)
    if collection:
        coll_init.add (name)
    else:
        single_init.add (name)
    return cp

# Each of the config file entries is defined as a subparser, for a
# command name (the entity being configured) and a set of arguments to
# configure it.

cp = config_cmd ("dialog", "Dialog parameters")
cp.add_argument ("--validate-attempts", type = int, metavar = "N",
                 default = VALIDATE_ATTEMPTS, choices = range (1, 101),
                 help = "Message status reads while waiting for a "
                 "message to become valid (range 1..100, default %d)"
                 % VALIDATE_ATTEMPTS)
cp.add_argument ("--validate-interval", type = seconds, metavar = "S",
                 default = VALIDATE_INTERVAL,
                 help = "Seconds between message status reads (default %d)"
                 % VALIDATE_INTERVAL)
cp.add_argument ("--requester", type = ipaddr, metavar = "A",
                 default = REQUESTER,
                 help = "Requester address sent in the activate code "
                 "(default %s)" % REQUESTER)

cp = config_cmd ("sign", "Sign configuration", collection = True)
cp.add_argument ("name", type = signname, help = "Sign name")
cp.add_argument ("--transport", metavar = "M:F", required = True,
                 help = "Transport factory, as module:callable.  It is "
                 "called with this config entry and returns a Transport")
cp.add_argument ("--host",
                 help = "Controller host name or address (default: same as name)")
cp.add_argument ("--port", type = int, metavar = "N", default = 161,
                 choices = range (1, 65536),
                 help = "Controller port number (default 161)")
cp.add_argument ("--community", default = "public",
                 help = "SNMP community name (default public)")
cp.add_argument ("--timeout", type = seconds, metavar = "S", default = 2.0,
                 help = "Request timeout in seconds (default 2)")
cp.add_argument ("--retries", type = int, metavar = "N", default = 1,
                 choices = range (11),
                 help = "Request retry count (range 0..10, default 1)")

def defaults (name):
    """Return the default configuration for the entry called "name".
    """
    p, msg = configparser.parse_args ([ name ])
    if not p:
        raise ValueError (msg)
    return p

class Config (object):
    """Container for configuration data.
    """
    def __init__ (self, f = None):
        if not f:
            f = open (DEFCONFIG, "rt")
        logging.debug ("Reading config {}", f.name)

        # First supply empty dicts for each collection config component
        for name in coll_init:
            setattr (self, name, dict ())
        # Also set defaults for non-collections:
        for name in single_init:
            setattr (self, name, defaults (name))
        if not self.scanconfig (f):
            sys.exit (1)

    def scanconfig (self, f, nested = False):
        ok = True
        with f:
            for l in f:
                l = l.strip ()
                if not l or l[0] == "#":
                    continue
                if l[0] == "@":
                    # Indirect file, read it recursively.  The supplied
                    # file name is relative to the current file.
                    fn = os.path.join (os.path.dirname (f.name), l[1:])
                    ok = self.scanconfig (open (fn, "rt"), True) and ok
                    continue
                args = shlex.split (l, comments = True)
                p, msg = configparser.parse_args (args)
                if not p:
                    logging.error ("Config file parse error in {}:\n {}\n {}",
                                   f.name, msg, l)
                    ok = False
                elif p.collection:
                    getattr (self, p.attr)[p.name] = p
                else:
                    setattr (self, p.attr, p)
        return ok
