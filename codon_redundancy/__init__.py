__version__ = '0.1'

from .codon_utils import (DNA_ALPHABET, STOP, GeneticCodeTranslator,
                          MutationType, UnknownGeneticCodeError,
                          available_genetic_codes, classify_mutation)
from .redundancy import (DegeneracyTable, InvalidCodonError,
                         build_degeneracy_table, clear_table_cache)
