from prometheus_client import Counter

EVALS = Counter("flag_evaluations_total", "Total flag evaluations", ["key", "result"])
ACTIVATIONS = Counter("flag_activations_total", "Total activation changes", ["key", "action"])
