from committer.cli import main

main()
