from filemerge.cli import main

main()
