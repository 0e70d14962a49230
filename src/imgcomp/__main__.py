from imgcomp.cli import main

main()
