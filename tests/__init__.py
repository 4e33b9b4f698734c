"""csv-hashjoin test suite.

- test_query_parser.py / test_query_model.py: command language
- test_table_loader.py: CSV loading and column index
- test_in_memory_join.py: hash join results
- test_strategies.py / test_executor.py: strategy dispatch and output routing
- test_config_loader.py / test_env_substitution.py / test_logging_config.py: ambient setup
- test_cli_flags.py: command-line entry point
"""
