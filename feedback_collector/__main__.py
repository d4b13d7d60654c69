# Enables: python -m feedback_collector
from feedback_collector.main import main

main()
