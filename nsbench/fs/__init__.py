"""File-system workloads, backend interface, memory sampling, cache control and CSV output."""