from widgetconf.cli import main

main()
