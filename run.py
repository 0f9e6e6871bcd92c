import sys
import logging

from planet_builder import Planet, ValidationError

REPORTS = ('physical', 'composition', 'all')


def run():
    preset = 'Earth'
    report = 'all'
    if len(sys.argv) > 1:
        preset = sys.argv[1]
    if len(sys.argv) > 2:
        report = sys.argv[2]
    if len(sys.argv) > 3:
        raise TypeError(f"run() takes from 0 to 2 positional arguments but {len(sys.argv) - 1} were given.")
    if report not in REPORTS:
        raise ValueError(f"Report must be one of {', '.join(REPORTS)}, not '{report}'.")

    planet = Planet.from_preset(preset)
    if report == 'physical':
        print(planet.physical.report())
    elif report == 'composition':
        print(planet.composition.report())
    else:
        print(planet.report())


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        run()
    except ValidationError as err:
        print(f"{err.prefix}:")
        for message in err.errors:
            print(f"  - {message}")
        sys.exit(1)
    except (KeyError, ValueError, TypeError) as err:
        print(f"Invalid input: {err}")
        sys.exit(1)
    sys.exit(0)
