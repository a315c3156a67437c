from toolchain_matrix.cli import main

raise SystemExit(main())
