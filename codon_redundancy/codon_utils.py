# Codon table utilities: genetic code lookup and mutation classification

import enum
import numbers
from typing import Dict, List, Union

from Bio.Data import CodonTable

STOP = '*'
DNA_ALPHABET = 'AGCT'
PURINES = frozenset('AG')
PYRIMIDINES = frozenset('CT')

GeneticCodeId = Union[int, str]


class UnknownGeneticCodeError(ValueError):
    pass


class MutationType(enum.Enum):
    TRANSITION = 'Ts'
    TRANSVERSION = 'Tv'


def classify_mutation(base_from: str, base_to: str) -> MutationType:
    """Classifies a single-base substitution as a transition or a transversion."""
    if base_from not in DNA_ALPHABET or base_to not in DNA_ALPHABET:
        raise ValueError(f'Invalid nucleotide pair: {base_from!r} -> {base_to!r}')
    if base_from == base_to:
        raise ValueError(f'Not a substitution: {base_from!r} -> {base_to!r}')

    if ((base_from in PURINES and base_to in PURINES) or
            (base_from in PYRIMIDINES and base_to in PYRIMIDINES)):
        return MutationType.TRANSITION
    return MutationType.TRANSVERSION


def available_genetic_codes() -> Dict[int, List[str]]:
    """Returns the NCBI ids of all known genetic codes with their names."""
    return {table_id: list(table.names)
            for table_id, table in sorted(CodonTable.unambiguous_dna_by_id.items())}


def resolve_codon_table(genetic_code: GeneticCodeId) -> CodonTable.CodonTable:
    if isinstance(genetic_code, bool):
        raise UnknownGeneticCodeError(f'Invalid codon table name: {genetic_code}')

    if isinstance(genetic_code, numbers.Integral):
        try:
            return CodonTable.unambiguous_dna_by_id[int(genetic_code)]
        except KeyError:
            raise UnknownGeneticCodeError(
                f'Invalid codon table id: {genetic_code}') from None

    if isinstance(genetic_code, str):
        name = genetic_code.strip()
        if name.isdigit():
            return resolve_codon_table(int(name))

        # "standard" is accepted the same way as the standard_dna_table attribute
        if name.lower() == 'standard':
            return CodonTable.standard_dna_table

        by_lower_name = {k.lower(): v for k, v in CodonTable.unambiguous_dna_by_name.items()}
        if name.lower() in by_lower_name:
            return by_lower_name[name.lower()]

    raise UnknownGeneticCodeError(f'Invalid codon table name: {genetic_code}')


class GeneticCodeTranslator:
    """Translates DNA codons to one-letter amino acids under a given genetic code."""

    def __init__(self, genetic_code: GeneticCodeId = 1):
        self.genetic_code = genetic_code
        self.initialize_codon_table(genetic_code)

    def initialize_codon_table(self, genetic_code: GeneticCodeId) -> None:
        self.codon_table = resolve_codon_table(genetic_code)
        self.ncbi_id = self.codon_table.id

        self.codon2aa = dict(self.codon_table.forward_table)
        for stopcodon in self.codon_table.stop_codons:
            # some codes reassign stop codons context-dependently; the sense
            # reading takes precedence
            self.codon2aa.setdefault(stopcodon, STOP)

    def translate(self, codon: str) -> str:
        try:
            return self.codon2aa[codon]
        except KeyError:
            raise ValueError(f'Codon {codon!r} is not defined in genetic code '
                             f'{self.genetic_code!r}') from None

    def is_stop(self, codon: str) -> bool:
        return self.translate(codon) == STOP
