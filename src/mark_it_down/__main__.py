from mark_it_down.adapters.textual.app import main

if __name__ == "__main__":
    main()
