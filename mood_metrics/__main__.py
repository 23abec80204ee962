from mood_metrics.cli.mood_metrics import main

if __name__ == "__main__":
    main()
