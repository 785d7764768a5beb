import logging
import numpy as np
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)

PLOT_FIGURE = "hybrid operation"


def plot_operation(result, signal, options=None) -> None:
    """
    Plots demand, reference, unit powers and energy contents of a simulated hybrid pair.
    If options.plot_sim is an integer it is used as the figure number, otherwise the figure
    PLOT_FIGURE is cleared and reused, so repeated runs do not pile up open figures
    """
    plot_sim = getattr(options, 'plot_sim', None)
    num = plot_sim if isinstance(plot_sim, int) and not isinstance(plot_sim, bool) else PLOT_FIGURE
    fig = plt.figure(num=num, figsize=(10, 8))
    fig.clf()
    ax_demand, ax_power, ax_energy = fig.subplots(3, 1, sharex=True)

    # Demand is drawn on a finer grid than the solver output
    time_fine = np.linspace(0.0, signal.period, 1000)
    ax_demand.plot(time_fine, [signal.fcn(t) for t in time_fine], label='demand')
    ax_demand.plot(result.time, [result.reference.fcn(t) for t in result.time], '--', label='base reference')
    ax_demand.set_ylabel('power')
    ax_demand.set_title(f'{result.strategy} operation at cut {result.cut}')

    for column, unit, color in [(0, result.base, 'tab:blue'), (1, result.peak, 'tab:orange')]:
        ax_power.plot(result.time, result.powers[:, column], color=color, label=unit.name)
        ax_power.axhline(unit.power, color=color, linestyle=':', linewidth=0.8)
        ax_power.axhline(-unit.power, color=color, linestyle=':', linewidth=0.8)
        ax_energy.plot(result.time, result.states[:, column], color=color, label=unit.name)
    ax_power.set_ylabel('power')
    ax_energy.set_ylabel('energy')
    ax_energy.set_xlabel('time')

    for ax in (ax_demand, ax_power, ax_energy):
        ax.grid(True)
        ax.legend(loc='upper right')
    fig.tight_layout()
    logger.debug("Plotted operation at cut %s into figure %s", result.cut, fig.number)
