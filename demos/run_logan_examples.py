import argparse
from pathlib import Path

import matplotlib.pyplot as plt

from springfem.logging_config import setup_logging
from springfem.post import equilibrium_residual, nodal_results, spring_results
from springfem.reader import read_model

MODELS = Path(__file__).parent / "models"


def plot_results(name, nodes, springs):
    """Nodal displacements and spring axial forces side by side."""
    fig, (ax_u, ax_n) = plt.subplots(1, 2, figsize=(10, 4))

    colors = ['tab:red' if c else 'tab:blue' for c in nodes['constrained']]
    ax_u.bar([str(i) for i in nodes.index], nodes['displacement'], color=colors)
    ax_u.set_title("Nodal displacement (red = prescribed)")
    ax_u.set_xlabel("node")
    ax_u.grid(True, alpha=0.3)

    ax_n.bar([str(i) for i in springs.index], springs['axial_force'])
    ax_n.set_title("Spring axial force (+ = tension)")
    ax_n.set_xlabel("spring")
    ax_n.grid(True, alpha=0.3)

    fig.suptitle(name)
    fig.tight_layout()


def main():
    """
    Solve the textbook spring assemblages in demos/models and print
    nodal results, spring forces and the equilibrium check for each.
    """
    parser = argparse.ArgumentParser(description='Solve the Logan chapter 2 spring examples')
    parser.add_argument('--plot', action='store_true', help='Plot displacements and spring forces')
    parser.add_argument('--verbose', action='store_true', help='Show solver log')
    args = parser.parse_args()

    if args.verbose:
        setup_logging("DEBUG")

    for path in sorted(MODELS.glob("*.fem")):
        model = read_model(path)
        model.solve()

        nodes = nodal_results(model)
        springs = spring_results(model)

        print(path.stem)
        print("=" * 50)
        print(nodes.to_string())
        print()
        print(springs.to_string())
        print()
        print(f"Equilibrium residual ΣF = {equilibrium_residual(model):.2e}")
        print()

        if args.plot:
            plot_results(path.stem, nodes, springs)

    if args.plot:
        plt.show()


if __name__ == "__main__":
    main()
