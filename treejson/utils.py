import sys, time
from textwrap import fill
from treejson import config as tjconf

_t_start = time.time()
_log_messages = set()


def print_log(msg, level, verbose, t_start, warn=False):
    """
    Print log message *msg* to stdout, prefixed with the time elapsed since
    *t_start* and indented by *level*.

    Parameters
    -----------

     msg : str
        String to print on the screen

     level : int
        Log-level. Only the messages with a level lower than the
        verbosity level will be shown.

     verbose : int
        Current verbosity level

     t_start : float
        Reference time (as returned by time.time())

     warn : bool
        Warning flag. If True, the message will also be shown
        if its level equals the verbosity level.

    """
    lw=80
    if level<verbose or (warn and level<=verbose):
        dt = time.time() - t_start
        outstr = '\n' if level<2 else ''
        initial_indent = format(dt, '4.2f')+'\t' + level*'-'
        subsequent_indent = " "*len(format(dt, '4.2f')) + "\t" + " "*level
        outstr += fill(msg, width=lw, initial_indent=initial_indent, subsequent_indent=subsequent_indent)
        print(outstr, file=sys.stdout)


def default_logger(msg, level, warn=False, only_once=False):
    """
    Module level logger used when ingestion functions are called without
    a logger. Uses the verbosity level `config.VERBOSE`.
    """
    if only_once and msg in _log_messages:
        return
    _log_messages.add(msg)
    print_log(msg, level, tjconf.VERBOSE, _t_start, warn=warn)


def is_value_valid(value):
    """
    Check whether a trait value carries information, i.e. is a number or a
    string that isn't one of the placeholders in `config.INVALID_TRAIT_VALUES`.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return False
    if isinstance(value, str) and value.lower() in tjconf.INVALID_TRAIT_VALUES:
        return False
    return True
