from .rosenbrock import Rosenbrock, ros2
