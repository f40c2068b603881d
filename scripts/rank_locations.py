# Script that loads candidate locations from a CSV and ranks them by distance to an address
from argparse import ArgumentParser
import logging
import signal
import sys

from colorama import just_fix_windows_console

from proximity_ranker.locations import CandidateLoader
from proximity_ranker.ranking import RankingSession
from proximity_ranker.settings import get_settings
from proximity_ranker.utils.errors import DataValidationError
from proximity_ranker.utils.progress import TqdmProgress, status_line, format_nearest

if __name__ == '__main__':
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    just_fix_windows_console()

    parser = ArgumentParser(description='Rank locations by distance to an address.')
    parser.add_argument('csv', help='CSV with name, street, city, state, zip columns')
    parser.add_argument('--street', default='')
    parser.add_argument('--city', default='')
    parser.add_argument('--state', default='')
    parser.add_argument('--zip', default='')
    parser.add_argument('--filter', '-f', default='', help='Only show rows matching this text')
    parser.add_argument('--top', '-k', type=int, default=get_settings().top_k)
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger('proximity_ranker').setLevel(logging.DEBUG)

    try:
        candidates = CandidateLoader.from_source('csv', path=args.csv)
    except DataValidationError as e:
        print(status_line('Load locations', False, str(e)))
        print(e.summary())
        sys.exit(1)
    print(status_line('Load locations', True, f'{len(candidates)} rows'))

    session = RankingSession(candidates, name=args.csv)
    origin = session.resolve_origin(args.street, args.city, args.state, args.zip)
    if origin is None:
        print(status_line('Resolve origin address', False, 'try city + state or ZIP'))
        sys.exit(1)
    print(status_line('Resolve origin address', True, f'{origin.latitude:.5f}, {origin.longitude:.5f}'))

    # Ctrl-C stops the pass before the next location instead of mid-request
    signal.signal(signal.SIGINT, lambda *_: session.cancel())
    with TqdmProgress() as progress:
        result = session.run_ranking_pass(origin, progress=progress)
    if result.cancelled:
        print(status_line('Geocode locations', False, f'cancelled after {result.processed} of {result.total}'))

    for rank, candidate in enumerate(session.top_nearest(args.top), start=1):
        print(format_nearest(rank, candidate.label, candidate.resolved_distance_miles))

    session.set_filter(args.filter)
    print()
    for candidate in session.view():
        row = candidate.to_dict()
        dist = f"{row['distance_miles']:.1f} mi" if row['distance_miles'] is not None else '-'
        print(f"{row['name']:<40} {dist:>10}  {row['address']}")

    if result.failed:
        print(status_line('Geocode locations', False, f'{len(result.failed)} could not be located'))
