from cargo_export.cli import main

main()
