from wallpaper_crop_solver.cli import main

main()
