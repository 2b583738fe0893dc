from odash.cli import main

raise SystemExit(main())
