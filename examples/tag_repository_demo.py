"""
Tag repository reading through a bounded cache, wired by hand.

Run: python examples/tag_repository_demo.py
"""
from blueprintpy import BoundedCache, ConsoleLogger, InMemoryTagRepository, Runtime, TagName


def main():
    logger = ConsoleLogger("tag-repo", level="DEBUG")

    program = (
        BoundedCache.make(logger)
        .flat_map(InMemoryTagRepository.make)
        .flat_map(lambda repo:
            repo.create(TagName("alpha"))
            .zip(repo.create(TagName("beta")))
            .zip(repo.create(TagName("gamma")))
            .flat_map(lambda ids: repo.delete(ids[0][1]).as_(ids))
            .flat_map(lambda ids:
                repo.find(ids[0][0]).tap(lambda tag: logger.info(f"Got {tag}"))
                .zip_right(repo.find(ids[0][1]))
                .tap(lambda tag: logger.info(f"Got {tag}"))))
    )

    Runtime.default.run(program)


if __name__ == "__main__":
    main()
