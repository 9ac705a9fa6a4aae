# cli.py

import argparse
import sys
from typing import List, Optional

from codon_redundancy import config, __version__
from codon_redundancy.codon_utils import available_genetic_codes
from codon_redundancy.log import hbar_stars, initialize_logging, log
from codon_redundancy.redundancy import build_degeneracy_table, set_table_cache_size


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='codon-redundancy',
        description='Codon site degeneracy (L0/L2S/L2V/L4) tables for a genetic code')
    parser.add_argument('-t', '--genetic-code', default=None,
                        help='NCBI genetic code id or name (default: standard)')
    parser.add_argument('-c', '--codon', action='append', default=None, metavar='CODON',
                        help='report only this codon (can be repeated)')
    parser.add_argument('-o', '--output', default=None,
                        help='output TSV file (default: standard output)')
    parser.add_argument('--preset', default=None, help='preset JSON file path')
    parser.add_argument('--list-codes', action='store_true',
                        help='list the available genetic codes and exit')
    parser.add_argument('--log', default=None, metavar='FILE', help='write a log file')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='only print warnings and errors')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(argv)


def list_genetic_codes(out) -> None:
    for table_id, names in available_genetic_codes().items():
        print(f'{table_id}\t{"; ".join(names)}', file=out)


def write_table(opts: dict, codons: Optional[List[str]], output: Optional[str]) -> None:
    table = build_degeneracy_table(opts['genetic_code'])
    frame = table.to_dataframe()
    if codons:
        for codon in codons:
            # validates before selecting rows
            table.values(codon)
        frame = frame.loc[codons]

    if output is None:
        frame.to_csv(sys.stdout, sep='\t', float_format=opts['float_format'])
    else:
        frame.to_csv(output, sep='\t', float_format=opts['float_format'])
        log.info(f'Degeneracy table saved to {output}')


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    initialize_logging(args.log, quiet=args.quiet)
    log.debug(f'Arguments: {args}')

    if args.list_codes:
        list_genetic_codes(sys.stdout)
        return

    opts = config.load_config()
    if args.preset:
        try:
            with open(args.preset) as f:
                opts.update(config.load_preset(f.read()))
            log.info(f'Loaded and applied preset from {args.preset}')
        except (OSError, ValueError) as e:
            log.error(f'Error loading preset file {args.preset}: {e}')
            sys.exit(1)
    if args.genetic_code is not None:
        opts['genetic_code'] = args.genetic_code

    try:
        set_table_cache_size(opts['table_cache_size'])
        write_table(opts, args.codon, args.output)
    except ValueError as e:
        log.error('\n'.join([hbar_stars, f'ERROR: {e}', hbar_stars]))
        sys.exit(1)
