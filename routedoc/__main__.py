from routedoc.cli import main

main()
