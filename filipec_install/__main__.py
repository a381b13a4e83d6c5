from filipec_install.cli import main

main()
