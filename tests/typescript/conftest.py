"""
Pytest configuration and fixtures for TypeScript extraction tests.
"""

import pytest

from mood_metrics.core.treesitter.typescript_extractor import TreeSitterTypeScriptExtractor


@pytest.fixture
def typescript_extractor():
    """Create a TreeSitterTypeScriptExtractor instance for testing."""
    return TreeSitterTypeScriptExtractor()


@pytest.fixture
def sample_typescript_code():
    """Shape hierarchy touching every member form the extractor handles."""
    return '''
interface Drawable {
    draw(): void;
}

export abstract class Shape implements Drawable {
    protected name: string;
    private secret = 1;
    #hidden = 2;
    static count = 0;
    onChange = () => {};

    constructor(name: string) {
        this.name = name;
    }

    abstract area(): number;

    describe(): string {
        return this.name;
    }

    private helper(): void {}

    get label(): string {
        return this.name;
    }

    set label(value: string) {
        this.name = value;
    }

    draw(): void {}
}

export class Circle extends Shape {
    public radius: number = 1;

    area(): number {
        return 3.14 * this.radius * this.radius;
    }

    scale(factor: number): void;
    scale(factor: number, extra?: number): void {
        this.radius *= factor;
    }

    protected draw(): void {}
}

class Square extends Shape {
    area(): number {
        return 1;
    }
}

enum Color { Red, Green }
'''


@pytest.fixture
def sample_angular_code():
    """Sample Angular TypeScript code for testing."""
    return '''
import { Component, Input, OnInit } from '@angular/core';

@Component({
    selector: 'app-user-card',
    template: `<div>{{user.name}}</div>`
})
export class UserCardComponent implements OnInit {
    @Input() user: any;

    ngOnInit(): void {
        console.log('Component initialized');
    }
}
'''


@pytest.fixture
def sample_tsx_code():
    return '''
import React from 'react';

export class Greeting extends React.Component<{ name: string }> {
    state = { open: false };

    render() {
        return <div className="greeting">Hello {this.props.name}</div>;
    }
}
'''
