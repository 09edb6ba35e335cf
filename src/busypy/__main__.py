from busypy.dispatch import main

main()
