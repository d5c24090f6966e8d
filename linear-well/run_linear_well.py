# -*- coding: utf-8 -*-
"""
Propagates a Gaussian in an infinite well under a uniform field and compares
its expectation value of the position with the classical trajectory.

Usage:
    python run_linear_well.py           # show the plot
    python run_linear_well.py --save    # save the plot to linear_well.png
"""

import argparse
import logging

import numpy as np
import matplotlib.pyplot as plt

from ehrenfest import run, setup

from linear_well import params

setup(logging.DEBUG)
logger = logging.getLogger('linear_well')
logger.setLevel(logging.INFO)

def main():
    parser = argparse.ArgumentParser(description="Wave packet in a uniform field")
    parser.add_argument("--save", action="store_true", help="save to linear_well.png")
    parser.add_argument("--method", default="banded", choices=["dense", "banded"])
    args = parser.parse_args()

    result = run(**params, method=args.method, verbose=True)

    # Norm is not enforced while stepping, so any drift shows here
    drift = np.max(np.abs(result.norms - 1))
    logger.info('Maximal norm drift: %.2e', drift)

    fig, (ax_x, ax_d) = plt.subplots(2, 1, sharex=True)
    result.plot(ax_x)
    ax_x.set_title(f"x0={params['x0']}, f={params['f']}, sigma={params['sigma']}")

    ax_d.plot(result.time_points, result.quantum_positions - result.classical_positions)
    ax_d.set_xlabel('t')
    ax_d.set_ylabel(r'$\langle x \rangle - x_{cl}$')

    if args.save:
        fig.savefig('linear_well.png')
    else:
        plt.show()


if __name__ == "__main__":
    main()
