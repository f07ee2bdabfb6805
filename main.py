#!/usr/bin/env python3


from whackers.main import main

if __name__ == "__main__":
    main()
