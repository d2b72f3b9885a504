"""Launch the Newton Polynomial Visualizer from a source checkout."""

from newton_visualizer.main import main

if __name__ == "__main__":
    main()
