# redundancy.py
#
# Site degeneracy tables for codon-based divergence statistics, following
# Comeron (1995) J. Mol. Evol. 41: 1152-1159. For every codon the first and
# third positions are classified as nondegenerate, twofold degenerate
# (synonymous through transitions or through transversions) or fourfold
# degenerate, and summed into the L0/L2S/L2V/L4 site counts.

import itertools
from typing import Dict, List, NamedTuple, Tuple

import numpy as np
import pandas as pd
import pylru

from .codon_utils import (DNA_ALPHABET, STOP, GeneticCodeId,
                          GeneticCodeTranslator, MutationType,
                          classify_mutation)
from .config import DEFAULT_CONFIG
from .log import log

TABLE_SHAPE = (len(DNA_ALPHABET),) * 3

FIRST_POSITION_TABLES = ('first_non', 'first_2s', 'first_2v')
THIRD_POSITION_TABLES = ('third_non', 'third_2s', 'third_2v', 'third_four')
L_VALUE_TABLES = ('l0', 'l2s', 'l2v', 'l4')
ALL_TABLES = FIRST_POSITION_TABLES + THIRD_POSITION_TABLES + L_VALUE_TABLES

_BASE_INDEX = {base: idx for idx, base in enumerate(DNA_ALPHABET)}


class InvalidCodonError(ValueError):
    pass


class MutationCounts(NamedTuple):
    num_n: int
    num_ts_s: int
    num_tv_s: int
    num_poss_ts: int
    num_poss_tv: int


def iter_codons():
    """Yields ((i, j, k), codon) for all 64 codons in canonical order."""
    for idx in itertools.product(range(len(DNA_ALPHABET)), repeat=3):
        yield idx, ''.join(DNA_ALPHABET[n] for n in idx)


def count_point_mutations(translator: GeneticCodeTranslator, codon: str,
                          position: int) -> MutationCounts:
    """Counts the single-base changes at `position` of `codon`.

    Changes from or to a stop codon are not counted at all.
    """
    num_n = num_ts_s = num_tv_s = 0
    num_poss_ts = num_poss_tv = 0

    codon_aa = translator.translate(codon)
    base = codon[position]
    for alt in DNA_ALPHABET:
        if alt == base:
            continue

        mutant = codon[:position] + alt + codon[position + 1:]
        mutant_aa = translator.translate(mutant)
        if codon_aa == STOP or mutant_aa == STOP:
            continue

        mtype = classify_mutation(base, alt)
        if mtype is MutationType.TRANSITION:
            num_poss_ts += 1
        else:
            num_poss_tv += 1

        if codon_aa != mutant_aa:
            num_n += 1
        elif mtype is MutationType.TRANSITION:
            num_ts_s += 1
        else:
            num_tv_s += 1

    return MutationCounts(num_n, num_ts_s, num_tv_s, num_poss_ts, num_poss_tv)


def first_position_values(counts: MutationCounts) -> Tuple[float, float, float]:
    """Returns (FirstN, First2S, First2V) for the mutation counts of a first position."""
    num_ts_s, num_tv_s = counts.num_ts_s, counts.num_tv_s
    num_poss_ts, num_poss_tv = counts.num_poss_ts, counts.num_poss_tv
    num_poss = num_poss_ts + num_poss_tv

    if num_poss == 0:
        # stop codon
        return 0.0, 0.0, 0.0
    if num_ts_s + num_tv_s == 0:
        # nondegenerate
        return 1.0, 0.0, 0.0

    if num_poss_ts != 0 and num_poss_tv != 0:
        if num_ts_s / num_poss_ts != 1.0 and num_tv_s / num_poss_tv != 1.0:
            # fractional redundancy
            first_2s = num_ts_s / num_poss
            first_2v = num_tv_s / num_poss
        else:
            # odd degeneracy
            first_2s = num_ts_s / num_poss_ts
            first_2v = num_tv_s / num_poss_tv
    else:
        first_2s = num_ts_s / num_poss if num_poss_ts > 0 else 0.0
        first_2v = num_tv_s / num_poss if num_poss_tv > 0 else 0.0

    return 1.0 - first_2s - first_2v, first_2s, first_2v


def third_position_values(counts: MutationCounts) -> Tuple[float, float, float, float]:
    """Returns (ThirdN, Third2S, Third2V, Third4) for the mutation counts of a third position."""
    num_ts_s, num_tv_s = counts.num_ts_s, counts.num_tv_s
    num_poss_ts, num_poss_tv = counts.num_poss_ts, counts.num_poss_tv

    if num_poss_ts + num_poss_tv == 0:
        return 0.0, 0.0, 0.0, 0.0
    if num_ts_s + num_tv_s == 0:
        return 1.0, 0.0, 0.0, 0.0
    if num_ts_s + num_tv_s == 3:
        return 0.0, 0.0, 0.0, 1.0

    if num_ts_s == 0 or num_tv_s == 0:
        third_2s = num_ts_s / num_poss_ts if num_poss_ts > 0 else 0.0
        third_2v = num_tv_s / num_poss_tv if num_poss_tv > 0 else 0.0
        return 1.0 - third_2s - third_2v, third_2s, third_2v, 0.0

    # fractional degeneracy
    return 1.0 / 3.0, 1.0 / 3.0, 1.0 / 3.0, 0.0


def fill_first_position_counts(translator: GeneticCodeTranslator) -> Dict[str, np.ndarray]:
    tables = {name: np.zeros(TABLE_SHAPE) for name in FIRST_POSITION_TABLES}
    for idx, codon in iter_codons():
        values = first_position_values(count_point_mutations(translator, codon, 0))
        for name, value in zip(FIRST_POSITION_TABLES, values):
            tables[name][idx] = value
    return tables


def fill_third_position_counts(translator: GeneticCodeTranslator) -> Dict[str, np.ndarray]:
    tables = {name: np.zeros(TABLE_SHAPE) for name in THIRD_POSITION_TABLES}
    for idx, codon in iter_codons():
        counts = count_point_mutations(translator, codon, 2)
        third_n, third_2s, third_2v, third_4 = third_position_values(counts)
        tables['third_non'][idx] = third_n
        tables['third_2s'][idx] = third_2s
        tables['third_2v'][idx] = third_2v
        tables['third_four'][idx] = third_4
    return tables


def fill_l_values(translator: GeneticCodeTranslator,
                  first: Dict[str, np.ndarray],
                  third: Dict[str, np.ndarray]) -> Dict[str, np.ndarray]:
    """L values are the sums of the site degeneracy values of each codon."""
    tables = {name: np.zeros(TABLE_SHAPE) for name in L_VALUE_TABLES}
    for idx, codon in iter_codons():
        if translator.is_stop(codon):
            continue
        tables['l0'][idx] = 1.0 + first['first_non'][idx] + third['third_non'][idx]
        tables['l2s'][idx] = first['first_2s'][idx] + third['third_2s'][idx]
        tables['l2v'][idx] = first['first_2v'][idx] + third['third_2v'][idx]
        tables['l4'][idx] = third['third_four'][idx]
    return tables


def validate_codon(codon: str) -> Tuple[int, int, int]:
    """Maps a codon to its table indices.

    A valid codon has length 3 and contains only A, G, C and T (upper case).
    Raises InvalidCodonError otherwise.
    """
    if not isinstance(codon, str) or len(codon) != 3 or \
            any(base not in _BASE_INDEX for base in codon):
        raise InvalidCodonError(f'Invalid codon: {codon!r}')
    return _BASE_INDEX[codon[0]], _BASE_INDEX[codon[1]], _BASE_INDEX[codon[2]]


class DegeneracyTable:
    """Read-only per-codon degeneracy values for one genetic code.

    Instances are created by build_degeneracy_table(); every query takes a
    codon string such as 'CTC' and raises InvalidCodonError for anything that
    is not three upper-case A/G/C/T characters.
    """

    __slots__ = ('_genetic_code', '_ncbi_id', '_amino_acids', '_tables')

    def __init__(self, genetic_code: GeneticCodeId, ncbi_id: int,
                 amino_acids: Dict[str, str], tables: Dict[str, np.ndarray]):
        missing = set(ALL_TABLES) - set(tables)
        if missing:
            raise ValueError(f'Missing degeneracy tables: {sorted(missing)}')

        frozen = {}
        for name in ALL_TABLES:
            arr = np.array(tables[name], dtype=np.float64)
            if arr.shape != TABLE_SHAPE:
                raise ValueError(f'Table {name} has shape {arr.shape}, expected {TABLE_SHAPE}')
            arr.flags.writeable = False
            frozen[name] = arr

        self._genetic_code = genetic_code
        self._ncbi_id = ncbi_id
        self._amino_acids = dict(amino_acids)
        self._tables = frozen

    def __repr__(self) -> str:
        return f'{type(self).__name__}(genetic_code={self._genetic_code!r})'

    @property
    def genetic_code(self) -> GeneticCodeId:
        return self._genetic_code

    @property
    def ncbi_id(self) -> int:
        return self._ncbi_id

    def table(self, name: str) -> np.ndarray:
        """Returns the read-only (4, 4, 4) array of a table, indexed in DNA_ALPHABET order."""
        if name not in self._tables:
            raise KeyError(f'Unknown degeneracy table: {name}')
        return self._tables[name]

    def _lookup(self, name: str, codon: str) -> float:
        return float(self._tables[name][validate_codon(codon)])

    def first_non(self, codon: str) -> float:
        """Fraction of the first position that is nondegenerate."""
        return self._lookup('first_non', codon)

    def first_2s(self, codon: str) -> float:
        """Fraction of the first position that is synonymous via a transition."""
        return self._lookup('first_2s', codon)

    def first_2v(self, codon: str) -> float:
        """Fraction of the first position that is synonymous via a transversion."""
        return self._lookup('first_2v', codon)

    def third_non(self, codon: str) -> float:
        """Fraction of the third position that is nondegenerate."""
        return self._lookup('third_non', codon)

    def third_four(self, codon: str) -> float:
        """1.0 if the third position is fourfold degenerate."""
        return self._lookup('third_four', codon)

    def third_2s(self, codon: str) -> float:
        """Fraction of the third position that is synonymous via a transition."""
        return self._lookup('third_2s', codon)

    def third_2v(self, codon: str) -> float:
        """Fraction of the third position that is synonymous via a transversion."""
        return self._lookup('third_2v', codon)

    def l0(self, codon: str) -> float:
        """Nondegenerate sites: 1 + first_non + third_non (0 for stop codons)."""
        return self._lookup('l0', codon)

    def l2s(self, codon: str) -> float:
        """Transitional silent sites: first_2s + third_2s (0 for stop codons)."""
        return self._lookup('l2s', codon)

    def l2v(self, codon: str) -> float:
        """Transversional silent sites: first_2v + third_2v (0 for stop codons)."""
        return self._lookup('l2v', codon)

    def l4(self, codon: str) -> float:
        """Fourfold silent sites: third_four (0 for stop codons)."""
        return self._lookup('l4', codon)

    def values(self, codon: str) -> Dict[str, float]:
        idx = validate_codon(codon)
        return {name: float(self._tables[name][idx]) for name in ALL_TABLES}

    def to_dataframe(self) -> pd.DataFrame:
        codons: List[str] = []
        rows = []
        for idx, codon in iter_codons():
            codons.append(codon)
            row = {'amino_acid': self._amino_acids[codon]}
            row.update((name, float(self._tables[name][idx])) for name in ALL_TABLES)
            rows.append(row)
        return pd.DataFrame(rows, index=pd.Index(codons, name='codon'),
                            columns=['amino_acid', *ALL_TABLES])


_table_cache = pylru.lrucache(DEFAULT_CONFIG['table_cache_size'])


def set_table_cache_size(size: int) -> None:
    if size < 1:
        raise ValueError(f'Table cache size must be positive: {size}')
    _table_cache.size(size)


def clear_table_cache() -> None:
    _table_cache.clear()


def build_degeneracy_table(genetic_code: GeneticCodeId = 1) -> DegeneracyTable:
    """Builds the degeneracy tables of a genetic code.

    `genetic_code` is an NCBI table id or a table name (see
    available_genetic_codes()). Results are cached per NCBI id and identifier;
    cached tables are shared, which is safe because they are immutable.
    """
    translator = GeneticCodeTranslator(genetic_code)
    cache_key = (translator.ncbi_id, genetic_code)
    if cache_key in _table_cache:
        log.debug(f'Using cached degeneracy tables for genetic code {genetic_code!r}')
        return _table_cache[cache_key]

    log.debug(f'Filling first position counts for genetic code {genetic_code!r}')
    first = fill_first_position_counts(translator)
    log.debug(f'Filling third position counts for genetic code {genetic_code!r}')
    third = fill_third_position_counts(translator)
    log.debug(f'Filling L values for genetic code {genetic_code!r}')
    lvalues = fill_l_values(translator, first, third)

    amino_acids = {codon: translator.translate(codon) for _, codon in iter_codons()}
    table = DegeneracyTable(genetic_code, translator.ncbi_id, amino_acids,
                            {**first, **third, **lvalues})
    _table_cache[cache_key] = table
    log.info(f'Built degeneracy tables for genetic code {genetic_code!r} '
             f'(NCBI table {translator.ncbi_id})')
    return table
