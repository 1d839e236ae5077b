from snuts.cli import main

main()
