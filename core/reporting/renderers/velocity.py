from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib import ticker

from core.services.dashboard.models import VelocityPoint


class VelocityPngRenderer:
    """Grouped bars of created vs. completed tasks per schedule."""

    def render(self, points: Sequence[VelocityPoint], output_path: Path) -> Path:
        points = list(points)
        if not points:
            raise ValueError("No velocity data available for chart")

        names = [p.schedule for p in points]
        positions = range(len(points))
        width = 0.38

        fig, ax = plt.subplots(figsize=(max(6, 1.6 * len(points) + 3), 4.5))
        try:
            ax.bar([i - width / 2 for i in positions], [p.created for p in points],
                   width=width, label="Criadas", color="#9db4e0", edgecolor="black", linewidth=0.6)
            ax.bar([i + width / 2 for i in positions], [p.completed for p in points],
                   width=width, label="Concluídas", color="#3f9e5a", edgecolor="black", linewidth=0.6)

            ax.set_xticks(list(positions))
            ax.set_xticklabels(names, fontsize=9)
            ax.yaxis.set_major_locator(ticker.MaxNLocator(integer=True))
            ax.set_ylabel("Atividades")
            ax.set_title("Velocidade por cronograma")
            ax.legend(loc="upper right")
            ax.grid(True, axis="y", linestyle=":", linewidth=0.5)

            fig.tight_layout()
            fig.savefig(output_path, dpi=150)
        finally:
            plt.close(fig)

        return output_path
