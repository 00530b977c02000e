from webhook_probe.startup import main

main()
