"""
Desktop version of the playground.

    python -m eigen_playground
    python -m eigen_playground --singular-policy propagate --log-level DEBUG
    python -m eigen_playground --export-gif svd_path.gif
    python -m eigen_playground --eigen 2 7 1 0.5 --export-sweep sweep.gif
"""

import argparse
import logging
import sys

from eigen_playground.config import NORM, SINGULAR_POLICIES, PlaygroundConfig
from eigen_playground.exceptions import PlaygroundError
from eigen_playground.model import TransformModel

logger = logging.getLogger("eigen_playground")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="eigen_playground",
        description="Drag eigenvectors and basis vectors of a 2x2 matrix and watch its SVD.",
    )
    parser.add_argument("--norm", type=float, default=NORM,
                        help="radius of the sample ring in model units (default: %(default)s)")
    parser.add_argument("--singular-policy", choices=SINGULAR_POLICIES, default="reject",
                        help="what to do with two parallel eigenvectors (default: %(default)s)")
    parser.add_argument("--interval", type=int, default=33,
                        help="milliseconds between frames (default: %(default)s)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--export-gif", metavar="PATH",
                        help="write a GIF of the SVD path of A to PATH and exit")
    parser.add_argument("--export-sweep", metavar="PATH",
                        help="write a GIF sweeping the first eigenvalue from -2 to 2 to PATH and exit "
                             "(needs --eigen)")
    parser.add_argument("--eigen", nargs=4, metavar=("I", "J", "L1", "L2"),
                        help="start with samples I and J selected and eigenvalues L1, L2")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = PlaygroundConfig(norm=args.norm, singular_policy=args.singular_policy)
        model = TransformModel(config)
        if args.eigen:
            i, j, l1, l2 = args.eigen
            model.select_basis_vector(int(i))
            model.select_basis_vector(int(j))
            model.set_eigenvalue(0, float(l1))
            model.set_eigenvalue(1, float(l2))
            model.tick()
    except (PlaygroundError, ValueError) as e:
        logger.error("%s", e)
        return 2

    # matplotlib is only needed from here on
    from eigen_playground.mpl_surface import (
        PlaygroundWindow,
        create_eigen_sweep_gif,
        create_svd_path_gif,
    )

    if args.export_gif or args.export_sweep:
        try:
            if args.export_gif:
                create_svd_path_gif(args.export_gif, model)
            if args.export_sweep:
                create_eigen_sweep_gif(args.export_sweep, model)
        except PlaygroundError as e:
            logger.error("Failed to create animation: %s", e)
            return 1
        return 0

    PlaygroundWindow(model, interval_ms=args.interval).show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
