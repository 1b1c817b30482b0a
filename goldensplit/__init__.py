""" goldensplit/__init__.py """

# __all__ = []

from .SplitSetSelector import (SplitSetSelector, Permutation, Overhang,
                               Fragment, NoValidOverhangsError,
                               OverhangPositionError, is_unique_permutation,
                               split_sequence, assemble_fragments)
from .FrequencyTable import FrequencyTable
from .regions import (Region, get_regions, get_regions_prioritizing_problems,
                      find_problems)
from .biotools import reverse_complement, is_palindromic, list_kmers
from .spacers import synthesize_spacer, add_spacers_to_fragments
from .reports import write_report_for_split
from .version import __version__
