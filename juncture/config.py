import argparse

from . import __version__
from .cluster.constants import DEFAULTS as CLUSTER_DEFAULTS
from .constants import CLUSTER_METHOD, positive_integer
from .util import NullableType


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(positive_integer)
        'INT'
    """
    if isinstance(arg_type, NullableType):
        metavar = get_metavar(arg_type.callback_func)
        return '{}|None'.format(metavar) if metavar else None
    elif arg_type == float:
        return 'FLOAT'
    elif arg_type in [int, positive_integer]:
        return 'INT'
    return None


def augment_parser(arguments, parser):
    """
    Adds options to the given parser. Options which are defined in a defaults namespace use its
    definition, type and value (which may be set through the environment)

    Args:
        arguments (list of str): the option names
        parser (argparse.ArgumentParser): the parser or argument group to add the options to

    Raises:
        KeyError: the option name is not known
    """
    for arg in arguments:
        if arg == 'help':
            parser.add_argument('-h', '--help', action='help', help='show this help message and exit')
        elif arg == 'version':
            parser.add_argument(
                '-v', '--version', action='version', version='%(prog)s version ' + __version__,
                help='Outputs the version number')
        elif arg == 'log':
            parser.add_argument('--log', help='redirect stdout to a log file', default=None)
        elif arg == 'log_level':
            parser.add_argument(
                '--log_level', help='level of logging to output', choices=['INFO', 'DEBUG', 'WARNING'],
                default='INFO')
        elif arg in CLUSTER_DEFAULTS:
            cast_type = CLUSTER_DEFAULTS.type(arg)
            kwargs = {}
            if cast_type is CLUSTER_METHOD:
                kwargs['choices'] = sorted(CLUSTER_METHOD.values())
            parser.add_argument(
                '--{}'.format(arg),
                default=CLUSTER_DEFAULTS[arg],
                type=cast_type,
                help=CLUSTER_DEFAULTS.define(arg),
                **kwargs
            )
        else:
            raise KeyError('invalid argument', arg)
