from llm_linter.cli import main

main()
