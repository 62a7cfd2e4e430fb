#!python
import argparse
import logging
import platform
import sys
import time

from . import __version__
from . import config as _config
from .cluster import main as cluster_main
from .cluster.constants import DEFAULTS as CLUSTER_DEFAULTS
from .constants import EXIT_OK, SUBCOMMAND, JunctureNamespace
from . import util as _util

SETUP_ARGUMENTS = ['command', 'log', 'log_level']


def build_parser():
    """
    Returns:
        argparse.ArgumentParser: the parser with a subparser for each command
    """
    parser = argparse.ArgumentParser(formatter_class=_config.CustomHelpFormatter)
    _config.augment_parser(['version'], parser)
    subp = parser.add_subparsers(dest='command', help='the command to run')
    subp.required = True

    cluster = subp.add_parser(
        SUBCOMMAND.CLUSTER, formatter_class=_config.CustomHelpFormatter, add_help=False,
        help='cluster junctions read from junction tables')
    required = cluster.add_argument_group('required arguments')
    required.add_argument(
        '-n', '--inputs', nargs='+', help='path to the input junction files', required=True, metavar='FILEPATH')
    required.add_argument('-o', '--output', help='path to the output directory', required=True)
    optional = cluster.add_argument_group('optional arguments')
    _config.augment_parser(['help', 'version', 'log', 'log_level'], optional)
    _config.augment_parser(sorted(CLUSTER_DEFAULTS.keys()), optional)
    return parser


def main(argv=None):
    """
    parses the command line and runs the chosen command

    Args:
        argv (list): List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())

    parser = build_parser()
    args = JunctureNamespace(**parser.parse_args(argv).__dict__)
    command, log_to_file = args.command, args.log

    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    logging.basicConfig(format='{message}', style='{', level=args.log_level, filename=log_to_file)

    for attr in SETUP_ARGUMENTS:
        args.discard(attr)

    try:
        _util.LOG('juncture: {}'.format(__version__))
        _util.LOG('hostname:', platform.node(), time_stamp=False)
        _util.log_arguments(args)

        try:
            args.inputs = _util.bash_expands(*args.inputs)
        except FileNotFoundError:
            parser.error('--inputs file(s) for {} {} do not exist'.format(command, args.inputs))

        if command == SUBCOMMAND.CLUSTER:
            cluster_main.main(**args.to_dict(), start_time=start_time)

        duration = int(time.time()) - start_time
        _util.LOG('run time (hh/mm/ss): {}'.format(_util.format_duration(duration)), time_stamp=False)
        _util.LOG('run time (s): {}'.format(duration), time_stamp=False)
        return EXIT_OK
    except Exception as err:
        if log_to_file:
            logging.exception(err)  # capture the error in the logging output file
        raise err
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            if handler not in original_logging_handlers:
                handler.close()
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
